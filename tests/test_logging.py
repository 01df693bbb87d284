from __future__ import annotations

import io
import json
import logging
import unittest

from robinhood_client.logging import JsonFormatter, configure_logging


class JsonLoggingTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = logging.getLogger("robinhood_client")
        self.saved_handlers = list(self.logger.handlers)

    def tearDown(self) -> None:
        self.logger.handlers[:] = self.saved_handlers

    def _own_handlers(self) -> list:
        return [h for h in self.logger.handlers if h.get_name() == "robinhood_client.json"]

    def test_event_and_extra_fields(self) -> None:
        stream = io.StringIO()
        configure_logging("INFO", stream=stream)

        logging.getLogger("robinhood_client.api.builders").info("order_submitted", extra={"order_id": "abc"})

        payload = json.loads(stream.getvalue())
        self.assertEqual(payload["event"], "order_submitted")
        self.assertEqual(payload["order_id"], "abc")
        self.assertEqual(payload["level"], "INFO")

    def test_secret_fields_are_redacted(self) -> None:
        stream = io.StringIO()
        configure_logging("INFO", stream=stream)

        self.logger.info("login", extra={"password": "hunter2"})

        self.assertEqual(json.loads(stream.getvalue())["password"], "***")

    def test_configure_twice_keeps_one_handler(self) -> None:
        configure_logging("INFO", stream=io.StringIO())
        configure_logging("DEBUG", stream=io.StringIO())

        self.assertEqual(len(self._own_handlers()), 1)
        self.assertEqual(self.logger.level, logging.DEBUG)

    def test_second_call_switches_stream(self) -> None:
        first, second = io.StringIO(), io.StringIO()
        configure_logging("INFO", stream=first)
        configure_logging("INFO", stream=second)

        self.logger.info("logout")

        self.assertEqual(first.getvalue(), "")
        self.assertEqual(json.loads(second.getvalue())["event"], "logout")

    def test_foreign_stream_handler_is_left_alone(self) -> None:
        foreign_stream = io.StringIO()
        foreign = logging.StreamHandler(foreign_stream)
        foreign_formatter = logging.Formatter("%(message)s")
        foreign.setFormatter(foreign_formatter)
        self.logger.addHandler(foreign)

        stream = io.StringIO()
        configure_logging("INFO", stream=stream)
        self.logger.info("page_fetched", extra={"records": 3})

        self.assertEqual(json.loads(stream.getvalue())["records"], 3)
        self.assertIs(foreign.formatter, foreign_formatter)
        self.assertNotIsInstance(foreign.formatter, JsonFormatter)
        self.assertEqual(foreign_stream.getvalue(), "page_fetched\n")
        self.assertEqual(len(self._own_handlers()), 1)


if __name__ == "__main__":
    unittest.main()
