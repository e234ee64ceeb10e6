# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for payload parsing and logging configuration.
"""

import json
import logging
import os
import unittest
from datetime import date, datetime
from unittest.mock import patch

from ..errors import InvalidInput
from ..logging_config import JsonFormatter, configure_logging
from ..parsing import pick_first, to_date, to_float, to_text


class TestParsing(unittest.TestCase):

    def test_pick_first(self):
        payload = {"targetAmount": 5, "nested": {"value": 3}}
        self.assertEqual(pick_first(payload, [["target_amount"], ["targetAmount"]]), 5)
        self.assertEqual(pick_first(payload, [["nested", "value"]]), 3)
        self.assertEqual(pick_first(payload, [["missing"]], default=7), 7)

    def test_to_float(self):
        self.assertEqual(to_float("1,250.50", "amount"), 1250.5)
        self.assertEqual(to_float(3, "amount"), 3.0)
        self.assertEqual(to_float(None, "amount", default=0.0), 0.0)

    def test_to_float_rejects(self):
        with self.assertRaises(InvalidInput):
            to_float(None, "amount")
        with self.assertRaises(InvalidInput):
            to_float(True, "amount")
        with self.assertRaises(InvalidInput):
            to_float("ten", "amount")

    def test_to_float_rejects_huge_integer(self):
        with self.assertRaises(InvalidInput):
            to_float(10 ** 400, "amount")

    def test_to_date(self):
        self.assertEqual(to_date("2030-06-15", "d"), date(2030, 6, 15))
        self.assertEqual(to_date("2030-06-15T10:00:00Z", "d"), date(2030, 6, 15))
        self.assertEqual(to_date(datetime(2030, 6, 15, 8), "d"), date(2030, 6, 15))

    def test_to_date_rejects(self):
        with self.assertRaises(InvalidInput):
            to_date("not a date", "d")
        with self.assertRaises(InvalidInput):
            to_date(20300615, "d")

    def test_to_date_rejects_keywords(self):
        for keyword in ("now", "today", "tomorrow"):
            with self.assertRaises(InvalidInput):
                to_date(keyword, "d")

    def test_to_text(self):
        self.assertEqual(to_text("  BTC "), "BTC")
        self.assertEqual(to_text("", "Goal"), "Goal")


class TestLoggingConfig(unittest.TestCase):

    def tearDown(self):
        logging.getLogger().handlers.clear()

    def test_json_formatter(self):
        record = logging.LogRecord("wealth_model", logging.INFO, __file__, 1,
                                   "simulated %d paths", (10,), None)
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["message"], "simulated 10 paths")
        self.assertEqual(payload["level"], "INFO")

    def test_configure_logging(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug", "LOG_JSON": "1"}):
            configure_logging()
        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JsonFormatter)
        self.assertEqual(logging.getLogger("werkzeug").level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
