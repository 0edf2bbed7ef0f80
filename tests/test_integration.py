"""
Integration tests for emlmr
These tests drive the command line entry point from arguments to report.
"""

import io
import logging
import os
import sys
import unittest
import tempfile
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

# Add the project root to Python path for development testing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from emlmr.main import main


MESSAGE_ONE = (
    b"From: Alice <alice@example.com>\r\n"
    b"To: bob@example.com\r\n"
    b"Subject: =?utf-8?q?Quarterly_r=C3=A9sum=C3=A9?=\r\n"
    b"\r\n"
    b"Numbers attached.\r\n"
)

MESSAGE_TWO = (
    b"From: Carol <carol@example.com>\r\n"
    b"Subject: Lunch\r\n"
    b"Date: 03 Jan 2017 12:00:00 +0000\r\n"
    b"\r\n"
    b"Noon?\r\n"
)


class TestCommandLine(unittest.TestCase):
    """Test complete runs of the command line tool."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.mail = self.root / "mail"
        nested = self.mail / "archive"
        nested.mkdir(parents=True)
        (self.mail / "one.eml").write_bytes(MESSAGE_ONE)
        (nested / "two.eml").write_bytes(MESSAGE_TWO)
        (self.mail / "broken.eml").write_bytes(b"This file is not an email message.\n")

    def tearDown(self):
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
        self.temp_dir.cleanup()

    def run_main(self, argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = main(argv)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_directory_with_one_unparsable_file(self):
        code, out, err = self.run_main(["-r", str(self.mail)])

        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[0].startswith("date"))
        for column in ("filename", "from", "path", "subject", "to"):
            self.assertIn(column, lines[0])
        self.assertIn("Quarterly résumé", out)
        self.assertIn("Lunch", out)
        self.assertEqual(err.count("Error parsing"), 1)
        self.assertIn("broken.eml", err)

    def test_no_files_specified(self):
        log_file = str(self.root / "run.log")
        code, out, err = self.run_main(["--log-file", log_file])

        self.assertNotEqual(code, 0)
        self.assertIn("No files specified", out)
        self.assertIn("usage:", out)
        self.assertFalse(os.path.exists(log_file))

    def test_delimited_output_with_digest(self):
        output = str(self.root / "report.tsv")
        code, out, err = self.run_main([
            "-r", "-f", "Subject", "-f", "filename", "--digest", "md5", "--digest", "sha1",
            "-d", "\\t", "-o", output, str(self.mail),
        ])

        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        with open(output, encoding="utf-8") as f:
            lines = f.read().splitlines()

        self.assertEqual(lines[0].split("\t"), ["subject", "filename", "md5", "sha1"])
        self.assertEqual(len(lines), 3)
        cells = dict(zip(lines[0].split("\t"), lines[2].split("\t")))
        self.assertEqual(cells["filename"], "one.eml")
        self.assertEqual(cells["subject"], "Quarterly résumé")
        self.assertEqual(len(cells["md5"]), 32)
        self.assertEqual(len(cells["sha1"]), 40)

    def test_glob_pattern(self):
        code, out, err = self.run_main(["-q", "-f", "subject", str(self.mail / "*.eml")])

        self.assertEqual(code, 0)
        # Only the top-level files match; broken.eml fails to parse
        self.assertEqual(out.splitlines()[1:], ["Quarterly résumé"])

    def test_missing_file_is_not_fatal(self):
        code, out, err = self.run_main([
            "-q", "-f", "subject", str(self.root / "missing.eml"), str(self.mail / "one.eml"),
        ])

        self.assertEqual(code, 0)
        self.assertIn("missing.eml", err)
        self.assertEqual(len(out.splitlines()), 2)

    def test_list_fields(self):
        code, out, err = self.run_main(["-q", "-l", "-r", str(self.mail)])

        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), ["date", "from", "subject", "to"])

    def test_unwritable_output_is_fatal(self):
        output = str(self.root / "no-such-dir" / "report.csv")
        code, out, err = self.run_main(["-q", "-r", "-o", output, str(self.mail)])

        self.assertEqual(code, 1)
        self.assertIn("report.csv", err)

    def test_invalid_digest_is_usage_error(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(["--digest", "crc32", str(self.mail)])
        self.assertEqual(ctx.exception.code, 2)

    def test_invalid_delimiter_is_usage_error(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(["-d", ";;", "-o", str(self.root / "x.csv"), str(self.mail)])
        self.assertEqual(ctx.exception.code, 2)
        self.assertFalse((self.root / "x.csv").exists())

    def write_undecodable_messages(self):
        folder = self.root / "odd"
        folder.mkdir()
        for name in ("a.eml", "b.eml"):
            (folder / name).write_bytes(
                b"From: dave@example.com\r\n"
                b"Subject: =?x-unknown?q?abc?=\r\n"
                b"\r\n"
                b"Body\r\n"
            )
        return str(folder / "*.eml")

    def test_quiet_hides_debug_messages(self):
        code, out, err = self.run_main(["-q", "-f", "subject", self.write_undecodable_messages()])

        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines()[1:], ["=?x-unknown?q?abc?=", "=?x-unknown?q?abc?="])
        self.assertNotIn("Could not decode", err)

    def test_default_level_hides_debug_messages(self):
        code, out, err = self.run_main(["-f", "subject", self.write_undecodable_messages()])

        self.assertEqual(code, 0)
        self.assertNotIn("Could not decode", err)

    def test_verbose_shows_debug_messages(self):
        code, out, err = self.run_main(["-v", "-f", "subject", self.write_undecodable_messages()])

        self.assertEqual(code, 0)
        self.assertIn("Could not decode", err)

    def test_keyboard_interrupt(self):
        with mock.patch("emlmr.main.run_report", side_effect=KeyboardInterrupt):
            code, out, err = self.run_main(["-q", str(self.mail)])

        self.assertEqual(code, 1)
        self.assertIn("Operation cancelled by user.", err)

    def test_version(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            with self.assertRaises(SystemExit) as ctx:
                main(["--version"])
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn("emlmr v", stdout.getvalue())


if __name__ == "__main__":
    unittest.main()
