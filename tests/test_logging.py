from __future__ import annotations

import logging
import sys

import orjson

from reversi.logging_setup import log_event, reset_logging, setup_logging


def test_log_event_emits_json(caplog):
    caplog.set_level(logging.INFO)
    log_event("play", "game_over", winner="BLACK", plies=60)
    records = [r for r in caplog.records if r.name == "event.play"]
    assert len(records) == 1
    payload = orjson.loads(records[0].getMessage())
    assert payload["module"] == "play"
    assert payload["event"] == "game_over"
    assert payload["winner"] == "BLACK"
    assert payload["plies"] == 60
    assert "ts" in payload


def test_setup_logging_writes_file_once(tmp_path):
    path = tmp_path / "run.log"
    try:
        setup_logging(level="DEBUG", log_path=path)
        setup_logging(level="DEBUG", log_path=tmp_path / "ignored.log")
        logging.getLogger("reversi.test").debug("hello from test")
        for h in logging.getLogger().handlers:
            h.flush()
    finally:
        reset_logging()
    text = path.read_text(encoding="utf-8")
    assert "hello from test" in text
    assert "DEBUG" in text
    assert not (tmp_path / "ignored.log").exists()
    assert logging.getLogger().handlers == []


def test_redirect_stdio_routes_print_to_log(tmp_path):
    path = tmp_path / "stdio.log"
    try:
        setup_logging(level="INFO", log_path=path, redirect_stdio=True)
        print("board printed while redirected")
        for h in logging.getLogger().handlers:
            h.flush()
    finally:
        reset_logging()
    assert sys.stdout is sys.__stdout__
    text = path.read_text(encoding="utf-8")
    assert "board printed while redirected" in text
    assert " stdout - " in text
