"""Full-screen forecast display with single-key input."""

from __future__ import annotations

import os
import select
import sys
from typing import IO, Optional

import structlog
from rich.console import Console, RenderableType
from rich.live import Live

from .models import Forecast
from .response_formatter import ForecastFormatter

logger = structlog.get_logger(__name__)

QUIT_KEY = "q"


class TerminalSession:
    """Alternate screen plus unbuffered keyboard input.

    Used as a context manager. Leaving the block restores the saved terminal
    attributes and the normal screen, whether it exits normally or raises.
    """

    def __init__(self, console: Optional[Console] = None, stdin: Optional[IO[str]] = None) -> None:
        self.console = console or Console()
        self.stdin = stdin or sys.stdin
        self._live: Optional[Live] = None
        self._saved_attrs = None

    def _is_tty(self) -> bool:
        try:
            return self.stdin.isatty()
        except (AttributeError, ValueError):
            return False

    def __enter__(self) -> "TerminalSession":
        self._live = Live(console=self.console, screen=True, auto_refresh=False, transient=True)
        self._live.start()
        try:
            if self._is_tty():
                import termios
                import tty

                fd = self.stdin.fileno()
                self._saved_attrs = termios.tcgetattr(fd)
                tty.setcbreak(fd)
        except BaseException:
            self._live.stop()
            self._live = None
            raise
        logger.debug("terminal session started")
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if self._saved_attrs is not None:
                import termios

                termios.tcsetattr(self.stdin.fileno(), termios.TCSADRAIN, self._saved_attrs)
                self._saved_attrs = None
        finally:
            if self._live is not None:
                self._live.stop()
                self._live = None
            logger.debug("terminal session restored")
        return False

    def draw(self, renderable: RenderableType) -> None:
        if self._live is None:
            raise RuntimeError("draw() called outside of the terminal session")
        self._live.update(renderable, refresh=True)

    def read_key(self, timeout: Optional[float] = None) -> Optional[str]:
        """Return one key, ``None`` on timeout or ``""`` once input is closed."""
        if not self._is_tty():
            return self.stdin.read(1)
        fd = self.stdin.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(fd, 1)
        if not data:
            return ""
        return data.decode("utf-8", errors="replace")


def run_display(
    forecast: Forecast,
    session: TerminalSession,
    formatter: Optional[ForecastFormatter] = None,
    tick: Optional[float] = 0.25,
) -> int:
    """Draw ``forecast`` until ``q`` is pressed. Returns the number of frames drawn."""
    formatter = formatter or ForecastFormatter()
    frames = 0
    logger.debug("displaying forecast", days=len(forecast))
    with session:
        while True:
            session.draw(formatter.render(forecast))
            frames += 1
            key = session.read_key(tick)
            if key == QUIT_KEY:
                logger.info("quit requested", frames=frames)
                break
            if key == "":
                logger.info("input closed", frames=frames)
                break
    return frames
