"""
Tests for the main window's background tip requests.
"""

import os
import threading
import time

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt5.QtWidgets")

from vaultkeep.storage import LocalStorage, VaultStore  # noqa: E402
from vaultkeep.ui import MainWindow  # noqa: E402

app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


class SlowFetcher:
    """Holds the answer for ``slow_locale`` until released."""

    def __init__(self, slow_locale):
        self.slow_locale = slow_locale
        self.release = threading.Event()
        self.requested = []

    async def fetch_tip(self, locale):
        self.requested.append(locale)
        if locale == self.slow_locale:
            self.release.wait(5)
        return f"tip-{locale}"


def _settle(window, timeout=5.0):
    deadline = time.monotonic() + timeout
    for worker in window.tip_workers:
        worker.wait()
    while time.monotonic() < deadline:
        app.processEvents()
        if not any(w.isRunning() for w in window.tip_workers):
            app.processEvents()
            return


@pytest.fixture
def store(tmp_path):
    s = VaultStore(LocalStorage(str(tmp_path / "storage.json")))
    s.load()
    return s


class TestTipRefresh:

    def test_locale_change_fetches_while_previous_request_pending(self, store):
        fetcher = SlowFetcher(store.locale)
        window = MainWindow(store, fetcher)
        try:
            window.locale_combo.setCurrentIndex(window.locale_combo.findData("en"))
            assert window.locale == "en"
            fetcher.release.set()
            _settle(window)

            assert "en" in fetcher.requested
            assert "tip-en" in window.tip_label.text()
            assert "tip-vi" not in window.tip_label.text()
        finally:
            fetcher.release.set()
            window.close()

    def test_stale_tip_ignored(self, store):
        fetcher = SlowFetcher(None)
        window = MainWindow(store, fetcher)
        try:
            window.locale_combo.setCurrentIndex(window.locale_combo.findData("en"))
            _settle(window)
            window._handle_tip("vi", "old tip")
            assert "old tip" not in window.tip_label.text()
            assert "tip-en" in window.tip_label.text()
        finally:
            window.close()
