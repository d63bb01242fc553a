import io
import os
from datetime import date

import pytest
from rich.console import Console
from structlog.testing import capture_logs

from weather_tui.weather.display import TerminalSession, run_display
from weather_tui.weather.models import DailyReading, Forecast

FORECAST = Forecast(
    readings=(DailyReading(date(2024, 1, 1), 5.0), DailyReading(date(2024, 1, 2), 7.5))
)


class FakeSession:
    def __init__(self, keys):
        self.keys = list(keys)
        self.entered = False
        self.exited = False
        self.frames = []
        self.timeouts = []

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, *exc):
        self.exited = True
        return False

    def draw(self, renderable):
        self.frames.append(renderable)

    def read_key(self, timeout=None):
        self.timeouts.append(timeout)
        return self.keys.pop(0)


def _quiet_console():
    return Console(file=io.StringIO(), force_terminal=False, width=80)


def test_quits_on_q():
    session = FakeSession(["q"])
    assert run_display(FORECAST, session) == 1
    assert session.entered and session.exited


def test_other_keys_keep_running():
    session = FakeSession(["x", None, "Q", " ", "q"])
    assert run_display(FORECAST, session, tick=0.1) == 5
    assert len(session.frames) == 5
    assert session.timeouts == [0.1] * 5
    assert session.exited


def test_closed_input_stops():
    session = FakeSession(["a", ""])
    assert run_display(FORECAST, session) == 2
    assert session.exited


def test_restored_on_error():
    class Broken:
        def render(self, forecast):
            raise RuntimeError("render failed")

    session = FakeSession(["q"])
    with pytest.raises(RuntimeError):
        run_display(FORECAST, session, formatter=Broken())
    assert session.exited


def test_terminal_session_without_tty():
    session = TerminalSession(console=_quiet_console(), stdin=io.StringIO("xyq"))
    assert run_display(FORECAST, session) == 3
    assert session._live is None


def test_draw_outside_session():
    session = TerminalSession(console=_quiet_console(), stdin=io.StringIO(""))
    with pytest.raises(RuntimeError):
        session.draw("hello")


class FakeTTY:
    def isatty(self):
        return True

    def fileno(self):
        return 99


def test_terminal_attributes_restored(monkeypatch):
    termios = pytest.importorskip("termios")
    import tty

    calls = []
    monkeypatch.setattr(termios, "tcgetattr", lambda fd: ["saved", fd])
    monkeypatch.setattr(tty, "setcbreak", lambda fd: calls.append(("cbreak", fd)))
    monkeypatch.setattr(
        termios, "tcsetattr", lambda fd, when, attrs: calls.append(("restore", fd, attrs))
    )

    session = TerminalSession(console=_quiet_console(), stdin=FakeTTY())
    with pytest.raises(RuntimeError):
        with session:
            assert calls == [("cbreak", 99)]
            raise RuntimeError("boom")
    assert calls == [("cbreak", 99), ("restore", 99, ["saved", 99])]
    assert session._live is None


def test_logs_once_per_display():
    with capture_logs() as logs:
        run_display(FORECAST, FakeSession(["x", None, "y", "q"]))
    assert [entry["event"] for entry in logs] == ["displaying forecast", "quit requested"]


class TypingSession(TerminalSession):
    """Types ``keys`` into the terminal once the session is in cbreak mode."""

    def __init__(self, master, keys, **kwargs):
        super().__init__(**kwargs)
        self.master = master
        self.keys = keys

    def __enter__(self):
        session = super().__enter__()
        os.write(self.master, self.keys)
        return session


@pytest.fixture
def pseudo_terminal():
    pty = pytest.importorskip("pty")
    master, slave = pty.openpty()
    stdin = os.fdopen(slave, "r")
    yield master, stdin
    stdin.close()
    os.close(master)


def test_read_key_times_out_on_pty(pseudo_terminal):
    import termios

    master, stdin = pseudo_terminal
    before = termios.tcgetattr(stdin.fileno())
    session = TerminalSession(console=_quiet_console(), stdin=stdin)
    with session:
        assert session.read_key(0.01) is None
        os.write(master, b"z")
        assert session.read_key(1.0) == "z"
    assert termios.tcgetattr(stdin.fileno()) == before


def test_arrow_keys_do_not_quit_on_pty(pseudo_terminal):
    import termios

    master, stdin = pseudo_terminal
    before = termios.tcgetattr(stdin.fileno())
    session = TypingSession(master, b"xQ\x1b[Aq", console=_quiet_console(), stdin=stdin)
    # x, Q and the three bytes of the up-arrow sequence each redraw; q stops
    assert run_display(FORECAST, session, tick=1.0) == 6
    assert session._live is None
    assert termios.tcgetattr(stdin.fileno()) == before
