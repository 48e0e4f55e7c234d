"""Tests for the event loop error handler."""

import asyncio
import logging

from goalsetting.utils.error_handler import error_handler


def test_logs_exception_with_traceback(caplog):
    caplog.set_level(logging.ERROR)
    loop = asyncio.new_event_loop()
    try:
        try:
            raise RuntimeError("stray task failed")
        except RuntimeError as e:
            error_handler(loop, {"message": "Task exception was never retrieved", "exception": e})
    finally:
        loop.close()

    assert "Task exception was never retrieved: stray task failed" in caplog.text
    assert "Traceback" in caplog.text


def test_logs_message_without_exception(caplog):
    caplog.set_level(logging.ERROR)
    loop = asyncio.new_event_loop()
    try:
        error_handler(loop, {"message": "Unclosed transport"})
    finally:
        loop.close()

    assert "Unclosed transport" in caplog.text
