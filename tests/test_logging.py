"""Unit tests for the logging configuration."""

import logging

import pytest
import structlog

from deinflation.logging import configure_logging, resolve_level


def test_configure_logging(mocker):
    mock_basic_config = mocker.patch("logging.basicConfig")
    configure_logging(level="debug")
    mock_basic_config.assert_called_with(
        level=logging.DEBUG, format="%(message)s", stream=mocker.ANY
    )

    configure_logging(level="WARNING", json_output=True)
    mock_basic_config.assert_called_with(
        level=logging.WARNING, format="%(message)s", stream=mocker.ANY
    )
    assert logging.getLogger("urllib3").level == logging.WARNING

    with pytest.raises(ValueError, match="Unsupported log level"):
        configure_logging(level="invalid")

    structlog.reset_defaults()


def test_resolve_level():
    assert resolve_level("Info") == logging.INFO
    with pytest.raises(ValueError, match="Choose one of"):
        resolve_level("verbose")
