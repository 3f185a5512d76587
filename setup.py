"""Setup script for windowed-dtw package"""
from pathlib import Path

import setuptools

this_dir = Path(__file__).parent

# -----------------------------------------------------------------------------

# Load README in as long description
long_description: str = ""
readme_path = this_dir / "README.md"
if readme_path.is_file():
    long_description = readme_path.read_text()

requirements_path = this_dir / "requirements.txt"
with open(requirements_path, "r") as requirements_file:
    requirements = requirements_file.read().splitlines()

version_path = this_dir / "VERSION"
with open(version_path, "r") as version_file:
    version = version_file.read().strip()

setuptools.setup(
    name="windowed-dtw",
    version=version,
    description="Exact dynamic time warping distance and path under a fixed band",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    package_data={"windowed_dtw": ["py.typed"]},
    install_requires=requirements,
    entry_points={"console_scripts": ["windowed-dtw = windowed_dtw.__main__:main"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
    ],
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.7",
)
