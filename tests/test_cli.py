import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from ratiomatrix import AddMultiple, Matrix, ParseError, Rational, ScaleRow, Swap
from ratiomatrix.cli import SORT, load_job, main, parse_job, run_job

JOB = '''
rows = 3
columns = 3
simplify = true
cells = """
0 1 2
3 4 5
6 7 8
"""

[[steps]]
op = "sort"

[[steps]]
op = "scale"
row = 1
by = "1/3"

[[steps]]
op = "add"
dest = 2
src = 1
by = -6

[[steps]]
op = "swap"
rows = [2, 3]
'''


class CliTests(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory(prefix="ratiomatrix_job_")
        self.addCleanup(self._tmpdir.cleanup)
        self.tmp = Path(self._tmpdir.name)

    def write(self, text: str) -> Path:
        path = self.tmp / "job.toml"
        path.write_text(text)
        return path

    def test_load_job(self):
        job = load_job(self.write(JOB))
        self.assertEqual(job.matrix, Matrix.parse(3, 3, "0 1 2 3 4 5 6 7 8"))
        self.assertTrue(job.simplify)
        self.assertEqual(
            job.operations,
            [SORT, ScaleRow(0, Rational(1, 3)), AddMultiple(1, 0, Rational(-6)), Swap(1, 2)],
        )

    def test_run_job(self):
        log = run_job(load_job(self.write(JOB)))
        # two swaps from the sort, then one step per listed operation
        self.assertEqual(log.step_count, 5)
        self.assertEqual(log[2].result, Matrix.parse(3, 3, "1 4/3 5/3  6 7 8  0 1 2"))
        self.assertEqual(log[3].result, Matrix.parse(3, 3, "1 4/3 5/3  0 -1 -2  0 1 2"))
        self.assertEqual(log.latest, Matrix.parse(3, 3, "1 4/3 5/3  0 1 2  0 -1 -2"))
        self.assertEqual(
            [(cell.numerator, cell.denominator) for cell in log[2].result.row(0)],
            [(1, 1), (4, 3), (5, 3)],
        )

    def test_parse_job_errors(self):
        bad_jobs = [
            {"columns": 1, "cells": "1"},
            {"rows": 1, "columns": 1, "cells": 1},
            {"rows": 1, "columns": 1, "cells": "1", "steps": [{"op": "rotate"}]},
            {"rows": 1, "columns": 1, "cells": "1", "steps": [{"op": "swap", "rows": [1]}]},
            {"rows": 1, "columns": 1, "cells": "1", "steps": [{"op": "scale", "row": 0, "by": 2}]},
            {"rows": 1, "columns": 1, "cells": "1", "steps": [{"op": "scale", "row": 1, "by": 1.5}]},
            {"rows": 1, "columns": 1, "cells": "1", "steps": [{"op": "add", "dest": 1, "by": 2}]},
            {"rows": 1, "columns": 1, "cells": "1", "steps": ["sort"]},
            {"rows": 1, "columns": 1, "cells": "1", "steps": 5},
            {"rows": 1, "columns": 1, "cells": "1", "simplify": "false"},
            {"rows": True, "columns": 1, "cells": "1"},
            {"rows": 1, "columns": False, "cells": ""},
        ]
        for params in bad_jobs:
            with self.subTest(params=params):
                with self.assertRaises(ParseError):
                    parse_job(params)

    def test_invalid_toml_is_a_parse_error(self):
        with self.assertRaises(ParseError):
            load_job(self.write("rows = = 3"))

    def test_main_prints_log(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            status = main([str(self.write(JOB))])
        self.assertEqual(status, 0)
        output = stdout.getvalue()
        self.assertTrue(output.startswith("Initial matrix:\n"))
        self.assertIn("Step 1:\nSwapping row 1 with 2\n", output)
        self.assertIn("Scaling row 1 by 1/3", output)
        self.assertIn("Adding row 2 by -6 x row 1", output)
        self.assertIn("Step 5:\nSwapping row 2 with 3\n", output)

    def test_main_reports_errors(self):
        path = self.write('rows = 1\ncolumns = 1\ncells = "1"\n[[steps]]\nop = "swap"\nrows = [1, 4]\n')
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            status = main([str(path)])
        self.assertEqual(status, 1)
        self.assertIn("Error:", stderr.getvalue())

    def test_main_reports_malformed_steps(self):
        path = self.write('rows = 1\ncolumns = 1\ncells = "1"\nsteps = 5\n')
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            status = main([str(path)])
        self.assertEqual(status, 1)
        self.assertIn("steps", stderr.getvalue())

    def test_main_reports_undecodable_file(self):
        path = self.tmp / "job.toml"
        path.write_bytes(b"rows = 1\xff\n")
        with self.assertRaises(ParseError):
            load_job(path)
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            status = main([str(path)])
        self.assertEqual(status, 1)
        self.assertIn("Error:", stderr.getvalue())

    def test_main_reports_missing_file(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            status = main([str(self.tmp / "missing.toml")])
        self.assertEqual(status, 1)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
