"""
Main entry point for VaultKeep.

NOTICE:
This is a demo vault. Secrets are stored in clear text in a local file and
no login or encryption is performed.
"""

import sys
import signal
import logging
from typing import Optional
from PyQt5.QtWidgets import QApplication
from PyQt5.QtCore import Qt

from vaultkeep.ui import MainWindow
from vaultkeep.storage import LocalStorage, VaultStore
from vaultkeep.tips import TipFetcher
from vaultkeep import config


class VaultKeepApp:
    """Main application class for the vault demo."""

    def __init__(self):
        """Initialize the application."""
        self.app = QApplication(sys.argv)
        self.app.setApplicationName(config.APP_NAME)
        self.app.setOrganizationName(config.APP_NAME)

        # Set application style
        self.app.setStyle(config.APP_STYLE)

        self.store = VaultStore(LocalStorage(config.get_storage_path()))
        self.fetcher = TipFetcher()
        self.main_window: Optional[MainWindow] = None

        # Handle Ctrl+C gracefully
        signal.signal(signal.SIGINT, signal.SIG_DFL)

    def run(self) -> int:
        """Run the application."""
        self.store.load()
        self.main_window = MainWindow(self.store, self.fetcher)
        self.main_window.show()
        return self.app.exec_()


def main():
    """Main entry point."""
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    # Enable high DPI scaling
    if hasattr(Qt, 'AA_EnableHighDpiScaling'):
        QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    if hasattr(Qt, 'AA_UseHighDpiPixmaps'):
        QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)

    app = VaultKeepApp()
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
