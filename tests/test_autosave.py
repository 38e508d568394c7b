import time

from PySide6.QtCore import QCoreApplication

from storyboard_manager.core.autosave import AutosaveScheduler


def process_events_for(ms):
    deadline = time.monotonic() + ms / 1000
    while time.monotonic() < deadline:
        QCoreApplication.processEvents()
        time.sleep(0.005)


class TestAutosaveScheduler:
    def test_fires_once_after_delay(self, q_app):
        calls = []
        scheduler = AutosaveScheduler(lambda: calls.append(1), delay_ms=30)

        assert scheduler.schedule() is True
        assert scheduler.is_pending()
        assert calls == []

        process_events_for(150)

        assert calls == [1]
        assert not scheduler.is_pending()

    def test_reschedule_restarts_window(self, q_app):
        calls = []
        scheduler = AutosaveScheduler(lambda: calls.append(1), delay_ms=100)

        scheduler.schedule()
        process_events_for(60)
        scheduler.schedule()
        process_events_for(60)
        assert calls == []

        process_events_for(150)
        assert calls == [1]

    def test_cancel(self, q_app):
        calls = []
        scheduler = AutosaveScheduler(lambda: calls.append(1), delay_ms=20)

        scheduler.schedule()
        scheduler.cancel()
        process_events_for(80)

        assert calls == []
        assert not scheduler.is_pending()

    def test_disabled_is_noop(self, q_app):
        calls = []
        scheduler = AutosaveScheduler(lambda: calls.append(1), delay_ms=20)
        scheduler.set_enabled(False)

        assert scheduler.schedule() is False
        process_events_for(60)
        assert calls == []

    def test_disabling_cancels_pending(self, q_app):
        calls = []
        scheduler = AutosaveScheduler(lambda: calls.append(1), delay_ms=20)

        scheduler.schedule()
        scheduler.set_enabled(False)
        process_events_for(60)

        assert calls == []

    def test_fired_signal(self, q_app):
        fired = []
        scheduler = AutosaveScheduler(lambda: None, delay_ms=10)
        scheduler.fired.connect(lambda: fired.append(True))

        scheduler.schedule()
        process_events_for(80)

        assert fired == [True]
