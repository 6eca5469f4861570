"""Tests for logging setup."""

import logging

from tweet_segments.logging_config import setup_logging


class TestSetupLogging:
    def test_levels(self):
        setup_logging(debug=False)
        assert logging.getLogger("tweet_segments").level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING

        setup_logging(debug=True)
        assert logging.getLogger("tweet_segments").level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.DEBUG

    def test_repeated_calls_keep_one_handler(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("tweet_segments").handlers) == 1
