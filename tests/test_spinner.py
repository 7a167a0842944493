"""Tests for the progress spinner."""

from __future__ import annotations

import io
import time

import pytest
from review_assistant.spinner import Spinner


@pytest.mark.unit
def test_spinner_repaints_and_clears_line() -> None:
    stream = io.StringIO()
    spinner = Spinner("Working...", stream=stream, interval_seconds=0.01, enabled=True)

    with spinner:
        time.sleep(0.05)
        assert spinner.running

    assert not spinner.running
    written = stream.getvalue()
    assert "Working... -" in written
    assert written.endswith("\r" + " " * len("Working... x") + "\r")


@pytest.mark.unit
def test_spinner_is_joined_when_block_raises() -> None:
    stream = io.StringIO()
    spinner = Spinner("Working...", stream=stream, interval_seconds=0.01, enabled=True)

    with pytest.raises(RuntimeError), spinner:
        raise RuntimeError("boom")

    assert not spinner.running


@pytest.mark.unit
def test_spinner_disabled_for_non_tty_stream() -> None:
    stream = io.StringIO()

    with Spinner("Working...", stream=stream, interval_seconds=0.01) as spinner:
        assert not spinner.running

    assert stream.getvalue() == ""


@pytest.mark.unit
def test_spinner_writes_plain_frames_when_color_disabled() -> None:
    stream = io.StringIO()

    with Spinner("Working...", stream=stream, interval_seconds=0.01, enabled=True, color=False):
        time.sleep(0.03)

    written = stream.getvalue()
    assert "\rWorking... -" in written
    assert "\x1b[" not in written
