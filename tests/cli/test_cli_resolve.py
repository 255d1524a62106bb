"""Tests for the resolve CLI."""

import os
from unittest import TestCase
from unittest.mock import patch

from click.testing import CliRunner

from queue_ops.cli.resolve import main


class TestResolveCLI(TestCase):
    """Tests for the resolve CLI command."""

    def setUp(self):
        self.runner = CliRunner()

    def test_resolve_requires_name_or_list(self):
        result = self.runner.invoke(main, [])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("Either --name or --list is required", result.output)

    def test_resolve_canonical(self):
        result = self.runner.invoke(main, ["--name", "GETQUEUEITEMS"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.strip(), "getQueueItems")

    def test_resolve_legacy_warns(self):
        result = self.runner.invoke(main, ["--name", "getListRange"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Use 'getQueueItems' instead of 'getListRange'", result.output)
        self.assertTrue(result.output.rstrip().endswith("getQueueItems"))

    def test_resolve_legacy_warning_disabled(self):
        result = self.runner.invoke(
            main,
            ["--name", "getListRange"],
            env={"QUEUE_OPS_WARN_LEGACY_OPERATIONS": "false"},
        )
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.strip(), "getQueueItems")

    def test_resolve_unknown(self):
        result = self.runner.invoke(main, ["--name", "not-a-real-op"])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("bad input", result.output)

    def test_list(self):
        result = self.runner.invoke(main, ["--list"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Queue Operations Protocol operations", result.output)
        self.assertIn("enqueue", result.output)
        self.assertIn("replaceQueueItem (legacy: replaceItem)", result.output)

    @patch.dict(os.environ, {})
    def test_dotenv_file_is_loaded(self):
        with self.runner.isolated_filesystem():
            with open(".env", "w") as env_file:
                env_file.write("QUEUE_OPS_APP_NAME=Test Bus\n")
            result = self.runner.invoke(main, ["--list"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Test Bus operations", result.output)
