import logging
import unittest

import logging_utils
from logging_utils import get_log_level, log_event, set_log_level


class TestLoggingUtils(unittest.TestCase):
    def setUp(self):
        self._level = get_log_level()

    def tearDown(self):
        set_log_level(self._level)

    def test_log_event_appends_fields_and_tag(self):
        with self.assertLogs(logging_utils.get_logger(), level="INFO") as captured:
            log_event("INFO", "Line", "Converted units", divisor=500)
        record = captured.records[0]
        self.assertEqual(record.getMessage(), "Converted units | divisor=500")
        self.assertEqual(record.tag, "Line")

    def test_warn_maps_to_warning(self):
        with self.assertLogs(logging_utils.get_logger(), level="INFO") as captured:
            log_event("WARN", "Config", "careful")
        self.assertEqual(captured.records[0].levelno, logging.WARNING)

    def test_set_log_level(self):
        set_log_level("debug")
        self.assertEqual(get_log_level(), "DEBUG")
        set_log_level("bogus")
        self.assertEqual(get_log_level(), "INFO")


if __name__ == "__main__":
    unittest.main()
