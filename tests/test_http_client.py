"""Tests for the shared HTTP helper and logging utilities."""

import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from common.http_client import safe_get
from common.logging_utils import Timer, configure_logging, extra_context, safe_url
from constants import Constants
from errors import TransportError


class TestSafeGet:
    """Tests for safe_get error translation."""

    @patch("common.http_client.requests.get")
    def test_returns_response_for_any_status(self, mock_get):
        mock_get.return_value = MagicMock(status_code=404)
        res = safe_get("https://lookup.example/LATEST_RELEASE_1", context="lookup")
        assert res.status_code == 404
        _, kwargs = mock_get.call_args
        assert kwargs["timeout"] == Constants.REQUEST_TIMEOUT
        assert kwargs["headers"]["User-Agent"] == Constants.USER_AGENT

    @patch("common.http_client.requests.get", side_effect=requests.ConnectionError("refused"))
    def test_connection_error_raises_transport_error(self, _):
        with pytest.raises(TransportError, match="refused"):
            safe_get("https://lookup.example/x", context="lookup")

    @patch("common.http_client.requests.get", side_effect=requests.Timeout())
    def test_timeout_raises_transport_error(self, _):
        with pytest.raises(TransportError, match="timed out"):
            safe_get("https://lookup.example/x", context="lookup")


class TestLoggingUtils:
    """Tests for logging helpers."""

    def test_safe_url_strips_credentials_and_query(self):
        assert safe_url("https://user:pw@host.example:8443/p/a?token=1#frag") == (
            "https://host.example:8443/p/a"
        )

    def test_extra_context_drops_none(self):
        assert extra_context(event="x", target=None) == {"event": "x"}

    def test_timer_measures(self):
        with Timer() as t:
            pass
        assert t.duration_ms() >= 0

    def test_configure_logging_is_idempotent(self):
        root = logging.getLogger()
        configure_logging("DEBUG")
        configure_logging("INFO")
        ours = [h for h in root.handlers if h.get_name() == "chromedriver-auto-stderr"]
        assert len(ours) == 1
        assert isinstance(ours[0], logging.StreamHandler)
        assert root.level == logging.INFO

    def test_repeated_configuration_adds_one_file_handler(self, tmp_path):
        log_file = str(tmp_path / "driver.log")
        configure_logging("INFO", log_file)
        configure_logging("INFO", log_file)
        files = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(files) == 1

        logging.getLogger("chromedriver_auto").warning("written once")
        files[0].flush()
        with open(log_file, encoding="utf-8") as f:
            assert f.read().count("written once") == 1

    def test_unknown_level_falls_back_to_default(self):
        configure_logging("LOUD")
        assert logging.getLogger().level == logging.getLevelName(Constants.DEFAULT_LOG_LEVEL)
