"""Test cases for the command-line interface."""
import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from windowed_dtw.__main__ import main

# -----------------------------------------------------------------------------


class CommandLineTests(unittest.TestCase):
    """Test cases for windowed-dtw command."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir_path = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write(self, name: str, text: str) -> str:
        file_path = self.dir_path / name
        file_path.write_text(text)
        return str(file_path)

    def _run(self, *argv: str):
        with io.StringIO() as output, redirect_stdout(output):
            exit_code = main(list(argv))
            return exit_code, output.getvalue()

    def test_distance(self):
        """Test distance and path output."""
        x_path = self._write("x.txt", "0\n0\n0\n")
        y_path = self._write("y.txt", "1 1 1\n")

        exit_code, output = self._run(
            x_path, y_path, "--window-frac", "1.0", "--path", "--buffer"
        )
        self.assertEqual(exit_code, 0)

        result = json.loads(output)
        self.assertEqual(result["distance"], 3.0)
        self.assertEqual(result["normalized_distance"], 0.5)
        self.assertEqual(result["window"], 3)
        self.assertEqual(result["path"], [[0, 0], [1, 1], [2, 2]])
        self.assertEqual(result["buffer"], [3, 0, 0, 1, 1, 2, 2])

    def test_distance_only(self):
        """Test that path is omitted unless requested."""
        x_path = self._write("x.txt", "1 2 3")

        exit_code, output = self._run(x_path, x_path)
        self.assertEqual(exit_code, 0)
        self.assertEqual(json.loads(output), {
            "distance": 0.0,
            "normalized_distance": 0.0,
            "window": 0,
        })

    def test_pairwise(self):
        """Test pairwise distance matrix output."""
        paths = [
            self._write("a.txt", "0 0 0"),
            self._write("b.txt", "1 1 1"),
            self._write("c.txt", "0 0 0"),
        ]

        exit_code, output = self._run("--pairwise", "--window-frac", "1", *paths)
        self.assertEqual(exit_code, 0)

        result = json.loads(output)
        self.assertEqual(result["files"], paths)
        self.assertEqual(
            result["distances"], [[0.0, 3.0, 0.0], [3.0, 0.0, 3.0], [0.0, 3.0, 0.0]]
        )

    def test_invalid_window(self):
        """Test exit status for an out-of-range window fraction."""
        x_path = self._write("x.txt", "1 2 3")

        exit_code, output = self._run(x_path, x_path, "--window-frac", "1.5")
        self.assertEqual(exit_code, 1)
        self.assertEqual(output, "")

    def test_missing_file(self):
        """Test exit status for an unreadable sequence file."""
        x_path = self._write("x.txt", "1 2 3")

        exit_code, _ = self._run(x_path, str(self.dir_path / "missing.txt"))
        self.assertEqual(exit_code, 1)

    def test_bad_data(self):
        """Test exit status for non-numeric sequence data."""
        x_path = self._write("x.txt", "1 2 3")
        y_path = self._write("y.txt", "1 two 3")

        exit_code, _ = self._run(x_path, y_path)
        self.assertEqual(exit_code, 1)

    def test_pairwise_with_path(self):
        """Test usage error when path output is requested for pairwise distances."""
        x_path = self._write("x.txt", "1 2 3")

        for flag in ["--path", "--buffer"]:
            with self.assertRaises(SystemExit):
                self._run("--pairwise", flag, x_path, x_path)

    def test_wrong_arguments(self):
        """Test usage error for a single sequence."""
        x_path = self._write("x.txt", "1 2 3")

        with self.assertRaises(SystemExit):
            self._run(x_path)


# -----------------------------------------------------------------------------

if __name__ == "__main__":
    unittest.main()
