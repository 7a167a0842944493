"""Progress spinner shown while network calls are outstanding."""

from __future__ import annotations

import sys
import threading
from types import TracebackType
from typing import TextIO

import typer

SPINNER_FRAMES = "-\\|/"
DEFAULT_INTERVAL_SECONDS = 0.1


class Spinner:
    """Background spinner that is always joined when its scope exits.

    Use as a context manager; the ticking thread stops on a `threading.Event`
    and the line is cleared before control returns to the caller.
    """

    def __init__(
        self,
        message: str,
        *,
        stream: TextIO | None = None,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        enabled: bool | None = None,
        color: bool | None = None,
    ) -> None:
        self.message = message
        self._stream = stream if stream is not None else sys.stderr
        self._interval_seconds = interval_seconds
        self._enabled = self._stream.isatty() if enabled is None else enabled
        self._color = color is not False
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _spin(self) -> None:
        frame_index = 0
        while not self._stop_event.is_set():
            frame = SPINNER_FRAMES[frame_index % len(SPINNER_FRAMES)]
            line = f"\r{self.message} {frame}"
            self._stream.write(typer.style(line, fg=typer.colors.CYAN) if self._color else line)
            self._stream.flush()
            frame_index += 1
            self._stop_event.wait(self._interval_seconds)

    def start(self) -> None:
        if not self._enabled or self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._spin, name="review-spinner", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None
        self._stream.write("\r" + " " * (len(self.message) + 2) + "\r")
        self._stream.flush()

    def __enter__(self) -> Spinner:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
