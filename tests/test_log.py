import io
import logging
import os
import unittest
from unittest.mock import patch

from slsrun.utils.log import configure_logging, get_logger


class TestLog(unittest.TestCase):
    def tearDown(self):
        for name in ("slsrun.test", "slsrun"):
            logging.getLogger(name).handlers.clear()

    def test_get_logger_attaches_one_handler(self):
        stream = io.StringIO()

        logger = get_logger("slsrun.test", stream=stream)
        get_logger("slsrun.test", stream=stream)
        logger.info("deploying")

        self.assertEqual(len(logger.handlers), 1)
        self.assertIn("| INFO | slsrun.test", stream.getvalue())
        self.assertTrue(stream.getvalue().rstrip().endswith("deploying"))

    @patch.dict(os.environ, {"SLSRUN_LOG_LEVEL": "warning"})
    def test_configure_logging_levels(self):
        self.assertEqual(configure_logging().level, logging.WARNING)
        self.assertEqual(configure_logging(verbose=True).level, logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
