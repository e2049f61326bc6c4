from __future__ import annotations

import logging

from app.startup import configure_logging


def test_configure_logging_defaults_to_info(monkeypatch) -> None:
    monkeypatch.delenv("NOMIRATE_LOG_LEVEL", raising=False)

    configure_logging()

    assert logging.getLogger().getEffectiveLevel() == logging.INFO


def test_configure_logging_respects_env(monkeypatch) -> None:
    monkeypatch.setenv("NOMIRATE_LOG_LEVEL", "debug")

    configure_logging()

    assert logging.getLogger().getEffectiveLevel() == logging.DEBUG


def test_configure_logging_falls_back_on_unknown_level(monkeypatch) -> None:
    monkeypatch.setenv("NOMIRATE_LOG_LEVEL", "LOUD")

    configure_logging()

    assert logging.getLogger().getEffectiveLevel() == logging.INFO
