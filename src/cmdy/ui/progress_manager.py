"""Terminal progress feedback for long-running commands."""

import logging
import sys
import threading
from typing import TextIO


SPINNER_FRAMES = ("|", "/", "-", "\\")
DEFAULT_INTERVAL = 0.2


class SpinnerIndicator:
    """
    Spinner line redrawn on a worker thread until it is told to stop.

    The main thread drives it with ``start()``, ``request_stop()`` and
    ``await_stopped()``. Once ``await_stopped()`` returns True the worker has
    exited and will write nothing more, so later output cannot interleave.
    """

    def __init__(
        self,
        message: str = "Working...",
        stream: TextIO | None = None,
        interval: float = DEFAULT_INTERVAL,
        done_message: str = "Complete!",
    ):
        """
        Initialize the spinner.

        Args:
            message: Text shown in front of the spinner glyph
            stream: Text stream to draw on (defaults to stdout)
            interval: Seconds between frames
            done_message: Text that replaces the spinner line when it stops
        """
        self.message = message
        self.stream = stream or sys.stdout
        self.interval = interval
        self.done_message = done_message
        self.frames_drawn = 0
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._logger = logging.getLogger(__name__)

    def start(self) -> None:
        """
        Start the worker thread.

        Raises:
            RuntimeError: If the spinner was already started
        """
        if self._thread is not None:
            raise RuntimeError("Spinner already started")

        self._thread = threading.Thread(
            target=self._spin, name="cmdy-spinner", daemon=True
        )
        self._thread.start()
        self._logger.debug(f"Spinner started: {self.message}")

    def request_stop(self) -> None:
        """Signal the worker to finish after its current frame."""
        self._stop_event.set()

    def await_stopped(self, timeout: float | None = None) -> bool:
        """
        Wait for the worker thread to exit.

        Args:
            timeout: Maximum seconds to wait (None waits indefinitely)

        Returns:
            bool: True once the worker is no longer running
        """
        if self._thread is None:
            return True

        self._thread.join(timeout)
        stopped = not self._thread.is_alive()
        if stopped:
            self._logger.debug(f"Spinner stopped after {self.frames_drawn} frames")
        return stopped

    def stop(self) -> bool:
        """Request a stop and wait for the worker to exit."""
        self.request_stop()
        return self.await_stopped()

    def is_running(self) -> bool:
        """Check if the worker thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def _spin(self) -> None:
        """Worker loop: draw a frame, then wait one interval for the stop signal."""
        while not self._stop_event.is_set():
            frame = SPINNER_FRAMES[self.frames_drawn % len(SPINNER_FRAMES)]
            self._write(f"\r{self.message} {frame}")
            self.frames_drawn += 1
            self._stop_event.wait(self.interval)

        # Pad so the done message fully covers the spinner line
        width = len(self.message) + 2
        self._write(f"\r{self.done_message.ljust(width)}\n")

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def __enter__(self) -> "SpinnerIndicator":
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.stop()
