"""Tests for the build CLI."""

import json
from unittest import TestCase
from unittest.mock import patch

import click
from click.testing import CliRunner

from queue_ops.cli.build import collect_fields, main


class TestCollectFields(TestCase):
    """Tests for collect_fields helper."""

    def test_skips_options_not_given(self):
        kwargs = {"operation": "getLock", "queue_name": "orders", "index": None, "queue": (), "lock": ()}
        self.assertEqual(collect_fields(kwargs), {"queue_name": "orders"})

    def test_multiple_options(self):
        kwargs = {"queue": ("a", "b"), "lock": ("c",)}
        self.assertEqual(collect_fields(kwargs), {"queues": ["a", "b"], "locks": ["c"]})

    def test_configuration_json(self):
        self.assertEqual(collect_fields({"configuration": '{"a": 1}'}), {"configuration": {"a": 1}})

    def test_configuration_invalid_json(self):
        with self.assertRaises(click.ClickException):
            collect_fields({"configuration": "not json"})

    def test_configuration_not_an_object(self):
        with self.assertRaises(click.ClickException):
            collect_fields({"configuration": "[1]"})


class TestBuildCLI(TestCase):
    """Tests for the build CLI command."""

    def setUp(self):
        self.runner = CliRunner()

    def test_build_requires_operation(self):
        result = self.runner.invoke(main, [])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("Missing option", result.output)

    def test_build_enqueue(self):
        result = self.runner.invoke(
            main, ["--operation", "enqueue", "--queue-name", "orders", "--message", "hello"]
        )
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(
            json.loads(result.output),
            {"operation": "enqueue", "payload": {"queuename": "orders"}, "message": "hello"},
        )

    def test_build_delete_all_queue_items_default_unlock(self):
        result = self.runner.invoke(main, ["--operation", "deleteAllQueueItems", "--queue-name", "orders"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(json.loads(result.output)["payload"], {"queuename": "orders", "unlock": False})

    def test_build_delete_all_queue_items_unlock(self):
        result = self.runner.invoke(
            main, ["--operation", "deleteAllQueueItems", "--queue-name", "orders", "--unlock"]
        )
        self.assertEqual(result.exit_code, 0)
        self.assertIs(json.loads(result.output)["payload"]["unlock"], True)

    def test_build_bulk_put_locks(self):
        result = self.runner.invoke(
            main,
            ["--operation", "bulkPutLocks", "--lock", "a", "--lock", "b", "--requested-by", "svc1"],
        )
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(
            json.loads(result.output)["payload"],
            {"locks": ["a", "b"], "requestedBy": "svc1"},
        )

    def test_build_set_configuration(self):
        result = self.runner.invoke(
            main, ["--operation", "setConfiguration", "--configuration", '{"processorDelayMax": 10}']
        )
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(
            json.loads(result.output),
            {"operation": "setConfiguration", "payload": {"processorDelayMax": 10}},
        )

    def test_build_legacy_name(self):
        result = self.runner.invoke(
            main,
            ["--operation", "getItem", "--queue-name", "orders", "--index", "1"],
            env={"QUEUE_OPS_WARN_LEGACY_OPERATIONS": "false"},
        )
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(json.loads(result.output)["operation"], "getQueueItem")

    def test_build_indent_setting(self):
        result = self.runner.invoke(main, ["--operation", "check"], env={"QUEUE_OPS_JSON_INDENT": "2"})
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output, '{\n  "operation": "check"\n}\n')

    def test_build_unknown_operation(self):
        result = self.runner.invoke(main, ["--operation", "not-a-real-op"])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("bad input", result.output)

    def test_build_field_outside_shape(self):
        result = self.runner.invoke(main, ["--operation", "getLock", "--queue-name", "orders", "--index", "2"])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("does not accept: index", result.output)

    def test_build_missing_field(self):
        result = self.runner.invoke(main, ["--operation", "putLock", "--queue-name", "orders"])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("requires: requested_by", result.output)

    @patch("queue_ops.cli.build.build")
    def test_build_is_called_with_resolved_operation(self, mock_build):
        mock_build.return_value = {"operation": "getLock"}
        result = self.runner.invoke(main, ["--operation", "GETLOCK", "--queue-name", "orders"])
        self.assertEqual(result.exit_code, 0)
        called_op = mock_build.call_args[0][0]
        self.assertEqual(called_op.value, "getLock")
        self.assertEqual(mock_build.call_args[1], {"queue_name": "orders"})
