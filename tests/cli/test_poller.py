"""Tests for the daemon poll loop."""

from __future__ import annotations

import signal

from conftest import MemoryCursorStore
from mailnotifier.cli import poller as poller_module
from mailnotifier.cli.poller import Poller


class ScriptedUseCase:
    """Returns queued results; stops the poller when the script runs out."""

    folder = "INBOX"

    def __init__(self, results):
        self.results = list(results)
        self.calls = []
        self.poller = None

    def run(self, count, cursor_store=None):
        self.calls.append((count, cursor_store))
        result = self.results.pop(0)
        if not self.results:
            self.poller.stop()
        if isinstance(result, Exception):
            raise result
        return result


def _poller(use_case, store=None, **kwargs) -> Poller:
    p = Poller(use_case=use_case, cursor_store=store or MemoryCursorStore(), **kwargs)
    use_case.poller = p
    return p


def test_runs_ticks_until_stopped(monkeypatch) -> None:
    monkeypatch.setattr(poller_module.time, "sleep", lambda s: None)
    store = MemoryCursorStore(7)
    uc = ScriptedUseCase([0, 2, 1])

    exit_code = _poller(uc, store, poll_interval=15, fetch_count=4).run()

    assert exit_code == 0
    assert uc.calls == [(4, store)] * 3
    p = uc.poller
    assert p.stats.ticks_completed == 3
    assert p.stats.total_announced == 3


def test_failed_tick_does_not_end_loop(monkeypatch) -> None:
    monkeypatch.setattr(poller_module.time, "sleep", lambda s: None)
    uc = ScriptedUseCase([RuntimeError("boom"), 1])

    assert _poller(uc).run() == 0
    assert uc.poller.stats.total_errors == 1
    assert uc.poller.stats.total_announced == 1


def test_sleep_is_sliced(monkeypatch) -> None:
    slept = []
    monkeypatch.setattr(poller_module.time, "sleep", slept.append)
    uc = ScriptedUseCase([0, 0])

    _poller(uc, poll_interval=2.5).run()

    assert slept == [1.0, 1.0, 0.5]


def test_signal_stops_loop_and_handlers_are_restored(monkeypatch) -> None:
    before = signal.getsignal(signal.SIGTERM)
    uc = ScriptedUseCase([0, 0, 0])
    p = _poller(uc, poll_interval=30)

    def fake_sleep(seconds):
        p._handle_shutdown(signal.SIGTERM, None)

    monkeypatch.setattr(poller_module.time, "sleep", fake_sleep)

    assert p.run() == 0
    assert len(uc.calls) == 1
    assert signal.getsignal(signal.SIGTERM) is before
