"""
User interface for VaultKeep.

NOTICE:
This is a demo vault. Secrets are shown, copied and stored in clear text.
"""

import asyncio
import datetime
from typing import Callable, Dict, Any, List, Optional

from PyQt5.QtWidgets import (
    QMainWindow, QDialog, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QTableWidget, QTableWidgetItem,
    QMessageBox, QGroupBox, QCheckBox, QSpinBox, QTextEdit,
    QDialogButtonBox, QComboBox, QFormLayout, QApplication, QStackedWidget,
    QListWidget,
)
from PyQt5.QtCore import Qt, QTimer, pyqtSignal, QThread
from PyQt5.QtGui import QFont

from .audit import AuditReport
from .generator import generate_password
from .i18n import translate
from .models import ITEM_TYPES, VaultItem, ValidationError
from .storage import VaultStore
from .tips import TipFetcher
from . import config


class TipWorker(QThread):
    """Worker thread for the security tip request."""

    finished = pyqtSignal(str, str)

    def __init__(self, fetcher: TipFetcher, locale: str):
        super().__init__()
        self.fetcher = fetcher
        self.locale = locale

    def run(self):
        self.finished.emit(self.locale, asyncio.run(self.fetcher.fetch_tip(self.locale)))


class StrengthWorker(QThread):
    """Worker thread for the password strength request."""

    finished = pyqtSignal(object)

    def __init__(self, fetcher: TipFetcher, password: str):
        super().__init__()
        self.fetcher = fetcher
        self.password = password

    def run(self):
        self.finished.emit(asyncio.run(self.fetcher.fetch_strength(self.password)))


class PasswordGeneratorDialog(QDialog):
    """Dialog for generating passwords."""

    def __init__(self, locale: str, parent=None):
        super().__init__(parent)
        self.locale = locale
        self.generated_password = ""
        self.init_ui()

    def tr_(self, key: str, **kwargs) -> str:
        return translate(key, self.locale, **kwargs)

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle(self.tr_('generator'))
        self.setModal(True)

        layout = QVBoxLayout()

        # Options
        options_group = QGroupBox(self.tr_('generator'))
        options_layout = QGridLayout()

        options_layout.addWidget(QLabel(self.tr_('length')), 0, 0)
        self.length_spin = QSpinBox()
        self.length_spin.setMinimum(config.PASSWORD_GENERATOR_MIN_LENGTH)
        self.length_spin.setMaximum(config.PASSWORD_GENERATOR_MAX_LENGTH)
        self.length_spin.setValue(config.PASSWORD_GENERATOR_DEFAULT_LENGTH)
        self.length_spin.valueChanged.connect(self.generate_password)
        options_layout.addWidget(self.length_spin, 0, 1)

        self.numbers_check = QCheckBox(self.tr_('include_numbers'))
        self.numbers_check.setChecked(True)
        self.numbers_check.toggled.connect(self.generate_password)
        options_layout.addWidget(self.numbers_check, 1, 0)

        self.symbols_check = QCheckBox(self.tr_('include_symbols'))
        self.symbols_check.setChecked(True)
        self.symbols_check.toggled.connect(self.generate_password)
        options_layout.addWidget(self.symbols_check, 1, 1)

        options_group.setLayout(options_layout)
        layout.addWidget(options_group)

        self.password_display = QLineEdit()
        self.password_display.setReadOnly(True)
        self.password_display.setFont(QFont("Consolas", 12))
        layout.addWidget(self.password_display)

        button_layout = QHBoxLayout()
        self.regenerate_button = QPushButton(self.tr_('regenerate'))
        self.regenerate_button.clicked.connect(self.generate_password)
        button_layout.addWidget(self.regenerate_button)

        self.copy_button = QPushButton(self.tr_('copy'))
        self.copy_button.clicked.connect(self.copy_password)
        button_layout.addWidget(self.copy_button)
        layout.addLayout(button_layout)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setLayout(layout)

        # Generate initial password
        self.generate_password()

    def generate_password(self):
        """Generate a new password based on selected options."""
        self.generated_password = generate_password(
            self.length_spin.value(),
            include_symbols=self.symbols_check.isChecked(),
            include_numbers=self.numbers_check.isChecked(),
        )
        self.password_display.setText(self.generated_password)

    def copy_password(self):
        """Copy generated password to clipboard."""
        QApplication.clipboard().setText(self.generated_password)

        # Show temporary notification
        self.copy_button.setText(self.tr_('copied'))
        QTimer.singleShot(1000, lambda: self.copy_button.setText(self.tr_('copy')))

    def get_password(self) -> str:
        return self.generated_password


class ItemDialog(QDialog):
    """Dialog for adding/editing vault items.

    ``on_save`` receives the form fields and raises ValidationError to keep
    the dialog open.
    """

    def __init__(self, locale: str, fetcher: TipFetcher,
                 on_save: Callable[[Dict[str, Any]], None],
                 item: Optional[VaultItem] = None, parent=None):
        super().__init__(parent)
        self.locale = locale
        self.fetcher = fetcher
        self.on_save = on_save
        self.item = item
        self.strength_worker: Optional[StrengthWorker] = None
        self.init_ui()

    def tr_(self, key: str, **kwargs) -> str:
        return translate(key, self.locale, **kwargs)

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle(self.tr_('edit_item') if self.item else self.tr_('add_item'))
        self.setModal(True)
        self.setMinimumWidth(500)

        layout = QVBoxLayout()
        form = QFormLayout()

        self.type_combo = QComboBox()
        for item_type in ITEM_TYPES:
            self.type_combo.addItem(self.tr_(item_type), item_type)
        form.addRow(self.tr_('type'), self.type_combo)

        self.name_input = QLineEdit()
        form.addRow(self.tr_('name'), self.name_input)
        layout.addLayout(form)

        self.field_inputs = {}

        # One page of fields per item type
        self.pages = QStackedWidget()
        self.pages.addWidget(self._build_login_page())
        self.pages.addWidget(self._build_card_page())
        self.pages.addWidget(self._build_note_page())
        layout.addWidget(self.pages)
        self.type_combo.currentIndexChanged.connect(self.pages.setCurrentIndex)

        self.notice_label = QLabel()
        self.notice_label.setStyleSheet("color: #c62828;")
        layout.addWidget(self.notice_label)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.validate_and_accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setLayout(layout)

        if self.item:
            self.type_combo.setCurrentIndex(ITEM_TYPES.index(self.item.type))
            self.name_input.setText(self.item.name)
            for name, value in self.item.secret_fields().items():
                widget = self.field_inputs.get(name)
                if widget is not None and value is not None:
                    if isinstance(widget, QTextEdit):
                        widget.setPlainText(value)
                    else:
                        widget.setText(value)

    def _build_login_page(self) -> QWidget:
        page = QWidget()
        form = QFormLayout()

        self.username_input = QLineEdit()
        form.addRow(self.tr_('username'), self.username_input)

        password_layout = QHBoxLayout()
        self.password_input = QLineEdit()
        self.password_input.setEchoMode(QLineEdit.Password)
        password_layout.addWidget(self.password_input)

        self.show_password_button = QPushButton("👁")
        self.show_password_button.setCheckable(True)
        self.show_password_button.toggled.connect(self.toggle_password_visibility)
        password_layout.addWidget(self.show_password_button)

        self.generate_button = QPushButton(self.tr_('generate'))
        self.generate_button.clicked.connect(self.generate_password)
        password_layout.addWidget(self.generate_button)

        self.ai_check_button = QPushButton(self.tr_('ai_check'))
        self.ai_check_button.clicked.connect(self.check_strength)
        password_layout.addWidget(self.ai_check_button)
        form.addRow(self.tr_('password'), password_layout)

        self.strength_label = QLabel()
        self.strength_label.setWordWrap(True)
        form.addRow("", self.strength_label)

        self.url_input = QLineEdit()
        form.addRow(self.tr_('url'), self.url_input)

        self.field_inputs.update(username=self.username_input, password=self.password_input,
                                 url=self.url_input)
        page.setLayout(form)
        return page

    def _build_card_page(self) -> QWidget:
        page = QWidget()
        form = QFormLayout()
        self.card_number_input = QLineEdit()
        form.addRow(self.tr_('card_number'), self.card_number_input)
        self.expiry_input = QLineEdit()
        self.expiry_input.setPlaceholderText("MM/YY")
        form.addRow(self.tr_('expiry'), self.expiry_input)
        self.cvv_input = QLineEdit()
        self.cvv_input.setEchoMode(QLineEdit.Password)
        form.addRow(self.tr_('cvv'), self.cvv_input)
        self.field_inputs.update(card_number=self.card_number_input, expiry=self.expiry_input,
                                 cvv=self.cvv_input)
        page.setLayout(form)
        return page

    def _build_note_page(self) -> QWidget:
        page = QWidget()
        form = QVBoxLayout()
        self.note_input = QTextEdit()
        form.addWidget(self.note_input)
        self.field_inputs['note'] = self.note_input
        page.setLayout(form)
        return page

    def toggle_password_visibility(self, checked: bool):
        self.password_input.setEchoMode(QLineEdit.Normal if checked else QLineEdit.Password)

    def generate_password(self):
        """Open password generator dialog."""
        dialog = PasswordGeneratorDialog(self.locale, self)
        if dialog.exec_():
            self.password_input.setText(dialog.get_password())

    def check_strength(self):
        """Ask the text service about the current password without blocking."""
        self.ai_check_button.setEnabled(False)
        self.strength_label.setText(self.tr_('checking'))
        self.strength_worker = StrengthWorker(self.fetcher, self.password_input.text())
        self.strength_worker.finished.connect(self._handle_strength)
        self.strength_worker.start()

    def _handle_strength(self, report):
        self.ai_check_button.setEnabled(True)
        if report.label:
            self.strength_label.setText(f"{report.label} ({report.score}/100): {report.feedback}")
        else:
            self.strength_label.clear()

    def get_fields(self) -> Dict[str, Any]:
        """Form values for the selected type only."""
        item_type = self.type_combo.currentData()
        fields: Dict[str, Any] = {'type': item_type, 'name': self.name_input.text()}
        page_fields = {
            'login': ('username', 'password', 'url'),
            'card': ('card_number', 'expiry', 'cvv'),
            'note': ('note',),
        }[item_type]
        for name in page_fields:
            widget = self.field_inputs[name]
            value = widget.toPlainText() if isinstance(widget, QTextEdit) else widget.text()
            fields[name] = value.strip() if name != 'password' else value
        return fields

    def validate_and_accept(self):
        """Save through the callback; stay open on validation errors."""
        try:
            self.on_save(self.get_fields())
        except ValidationError as e:
            self.notice_label.setText(self.tr_(e.key))
            return
        self.accept()


class AuditDialog(QDialog):
    """Shows the health score, reused groups and weak items."""

    def __init__(self, report: AuditReport, locale: str, parent=None):
        super().__init__(parent)
        self.report = report
        self.locale = locale
        self.init_ui()

    def tr_(self, key: str, **kwargs) -> str:
        return translate(key, self.locale, **kwargs)

    def init_ui(self):
        self.setWindowTitle(self.tr_('audit'))
        self.setMinimumWidth(450)
        layout = QVBoxLayout()

        score_label = QLabel(f"{self.tr_('score')}: {self.report.score}% ({self.tr_(self.report.label)})")
        score_label.setFont(QFont("", 14, QFont.Bold))
        layout.addWidget(score_label)

        reused_group = QGroupBox(f"{self.tr_('reused')}: {len(self.report.reused)}")
        reused_layout = QVBoxLayout()
        reused_list = QListWidget()
        for group in self.report.reused_groups():
            reused_list.addItem(", ".join(item.name for item in group))
        if not self.report.reused:
            reused_list.addItem(self.tr_('no_reused'))
        reused_layout.addWidget(reused_list)
        reused_group.setLayout(reused_layout)
        layout.addWidget(reused_group)

        weak_group = QGroupBox(f"{self.tr_('weak')}: {len(self.report.weak)}")
        weak_layout = QVBoxLayout()
        weak_list = QListWidget()
        for item in self.report.weak:
            weak_list.addItem(f"{item.name} ({item.username or ''})")
        if not self.report.weak:
            weak_list.addItem(self.tr_('no_weak'))
        weak_layout.addWidget(weak_list)
        weak_group.setLayout(weak_layout)
        layout.addWidget(weak_group)

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)
        self.setLayout(layout)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, store: VaultStore, fetcher: TipFetcher):
        super().__init__()
        self.store = store
        self.fetcher = fetcher
        self.tip_workers: List[TipWorker] = []
        self.clipboard_timer = QTimer()
        self.clipboard_timer.setSingleShot(True)
        self.clipboard_timer.timeout.connect(self.clear_clipboard)
        self.store.subscribe(lambda snapshot: self.refresh())
        self.init_ui()
        self.refresh()
        self.fetch_tip()

    @property
    def locale(self) -> str:
        return self.store.locale

    def tr_(self, key: str, **kwargs) -> str:
        return translate(key, self.locale, **kwargs)

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle(config.APP_TITLE_PREFIX)
        self.setGeometry(100, 100, 1000, 600)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout()
        central_widget.setLayout(layout)

        # Toolbar
        toolbar_layout = QHBoxLayout()

        self.search_input = QLineEdit()
        self.search_input.textChanged.connect(self.refresh)
        toolbar_layout.addWidget(self.search_input)

        self.type_filter = QComboBox()
        self.type_filter.currentIndexChanged.connect(self.refresh)
        toolbar_layout.addWidget(self.type_filter)

        self.favorites_check = QCheckBox()
        self.favorites_check.toggled.connect(self.refresh)
        toolbar_layout.addWidget(self.favorites_check)

        self.add_button = QPushButton()
        self.add_button.clicked.connect(self.add_item)
        toolbar_layout.addWidget(self.add_button)

        self.generator_button = QPushButton()
        self.generator_button.clicked.connect(self.show_generator)
        toolbar_layout.addWidget(self.generator_button)

        self.audit_button = QPushButton()
        self.audit_button.clicked.connect(self.show_audit)
        toolbar_layout.addWidget(self.audit_button)

        self.locale_combo = QComboBox()
        for code in config.SUPPORTED_LOCALES:
            self.locale_combo.addItem(code.upper(), code)
        self.locale_combo.setCurrentIndex(config.SUPPORTED_LOCALES.index(self.locale))
        self.locale_combo.currentIndexChanged.connect(self.change_locale)
        toolbar_layout.addWidget(self.locale_combo)

        layout.addLayout(toolbar_layout)

        self.tip_label = QLabel()
        self.tip_label.setWordWrap(True)
        layout.addWidget(self.tip_label)

        self.table = QTableWidget()
        self.table.setColumnCount(6)
        self.table.setAlternatingRowColors(True)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setColumnWidth(0, 40)
        self.table.setColumnWidth(1, 200)
        self.table.setColumnWidth(3, 220)
        self.table.setColumnWidth(4, 150)
        layout.addWidget(self.table)

        self.score_label = QLabel()
        self.statusBar().addPermanentWidget(self.score_label)
        self.count_label = QLabel()
        self.count_label.setStyleSheet("padding-right: 10px;")
        self.statusBar().addPermanentWidget(self.count_label)

        self.retranslate()

    def retranslate(self):
        """Apply the current locale to every static label."""
        self.search_input.setPlaceholderText(self.tr_('search'))
        self.favorites_check.setText(self.tr_('favorites_only'))
        self.add_button.setText(self.tr_('add_item'))
        self.generator_button.setText(self.tr_('generator'))
        self.audit_button.setText(self.tr_('audit'))

        current = self.type_filter.currentData()
        self.type_filter.blockSignals(True)
        self.type_filter.clear()
        self.type_filter.addItem(self.tr_('all_types'), None)
        for item_type in ITEM_TYPES:
            self.type_filter.addItem(self.tr_(item_type), item_type)
        if current:
            self.type_filter.setCurrentIndex(ITEM_TYPES.index(current) + 1)
        self.type_filter.blockSignals(False)

        self.table.setHorizontalHeaderLabels([
            "★", self.tr_('name'), self.tr_('type'), self.tr_('username'),
            self.tr_('last_used'), self.tr_('actions'),
        ])

    def notify(self, key: str):
        """Show a transient notice in the status bar."""
        self.statusBar().showMessage(self.tr_(key), config.NOTICE_TIMEOUT_MS)

    def refresh(self):
        """Reload the table and the audit summary from the store."""
        items = self.store.filter_items(
            query=self.search_input.text(),
            item_type=self.type_filter.currentData(),
            favorites_only=self.favorites_check.isChecked(),
        )
        self.table.setRowCount(0)
        for item in items:
            self.add_item_to_table(item)

        report = self.store.audit
        self.score_label.setText(f"{self.tr_('score')}: {report.score}% ({self.tr_(report.label)})")
        self.count_label.setText(self.tr_('items_count', count=len(self.store.items)))

    def add_item_to_table(self, item: VaultItem):
        row = self.table.rowCount()
        self.table.insertRow(row)

        self.table.setItem(row, 0, QTableWidgetItem("★" if item.favorite else ""))
        name_item = QTableWidgetItem(item.name)
        name_item.setData(Qt.UserRole, item.id)
        self.table.setItem(row, 1, name_item)
        self.table.setItem(row, 2, QTableWidgetItem(self.tr_(item.type)))

        account = getattr(item, 'username', None) or getattr(item, 'card_number', None) or ''
        self.table.setItem(row, 3, QTableWidgetItem(account))

        try:
            date_str = datetime.datetime.fromisoformat(item.last_used).strftime("%Y-%m-%d %H:%M")
        except ValueError:
            date_str = item.last_used
        self.table.setItem(row, 4, QTableWidgetItem(date_str))

        # Actions widget
        actions_widget = QWidget()
        actions_layout = QHBoxLayout()
        actions_layout.setContentsMargins(0, 0, 0, 0)

        copy_user_btn = QPushButton("📋")
        copy_user_btn.setMaximumWidth(30)
        copy_user_btn.clicked.connect(lambda: self.copy_to_clipboard(account))
        actions_layout.addWidget(copy_user_btn)

        if item.type == 'login':
            copy_pass_btn = QPushButton("🔑")
            copy_pass_btn.setMaximumWidth(30)
            copy_pass_btn.clicked.connect(lambda: self.copy_to_clipboard(item.password or ''))
            actions_layout.addWidget(copy_pass_btn)

        edit_btn = QPushButton("✏️")
        edit_btn.setMaximumWidth(30)
        edit_btn.clicked.connect(lambda: self.edit_item(item.id))
        actions_layout.addWidget(edit_btn)

        favorite_btn = QPushButton("♥")
        favorite_btn.setMaximumWidth(30)
        favorite_btn.clicked.connect(lambda: self.toggle_favorite(item.id))
        actions_layout.addWidget(favorite_btn)

        delete_btn = QPushButton("🗑️")
        delete_btn.setMaximumWidth(30)
        delete_btn.clicked.connect(lambda: self.delete_item(item.id))
        actions_layout.addWidget(delete_btn)

        actions_widget.setLayout(actions_layout)
        self.table.setCellWidget(row, 5, actions_widget)

    def add_item(self):
        def save(fields):
            fields = dict(fields)
            self.store.add_item(fields.pop('type'), fields)

        dialog = ItemDialog(self.locale, self.fetcher, save, parent=self)
        if dialog.exec_():
            self.notify('saved')

    def edit_item(self, item_id: str):
        item = self.store.get_item(item_id)
        if item is None:
            return
        dialog = ItemDialog(self.locale, self.fetcher,
                            lambda fields: self.store.update_item(item_id, fields),
                            item=item, parent=self)
        if dialog.exec_():
            self.notify('saved')

    def toggle_favorite(self, item_id: str):
        self.store.toggle_favorite(item_id)
        self.notify('favorite_updated')

    def delete_item(self, item_id: str):
        item = self.store.get_item(item_id)
        if item is None:
            return
        reply = QMessageBox.question(
            self, config.APP_NAME, self.tr_('confirm_delete', name=item.name),
            QMessageBox.Yes | QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            self.store.delete_item(item_id)
            self.notify('deleted')

    def copy_to_clipboard(self, text: str):
        if not text:
            return
        QApplication.clipboard().setText(text)
        self.notify('copied')
        self.clipboard_timer.start(config.CLIPBOARD_CLEAR_TIMEOUT_DEFAULT)

    def clear_clipboard(self):
        QApplication.clipboard().clear()

    def show_generator(self):
        dialog = PasswordGeneratorDialog(self.locale, self)
        dialog.exec_()

    def show_audit(self):
        self.fetch_tip()
        dialog = AuditDialog(self.store.audit, self.locale, self)
        dialog.exec_()

    def change_locale(self, index: int):
        self.store.set_locale(self.locale_combo.itemData(index))
        self.retranslate()
        self.refresh()
        self.fetch_tip()

    def fetch_tip(self):
        """Request a fresh tip for the current locale in the background."""
        worker = TipWorker(self.fetcher, self.locale)
        worker.finished.connect(self._handle_tip)
        self.tip_workers = [w for w in self.tip_workers if w.isRunning()]
        self.tip_workers.append(worker)
        worker.start()

    def _handle_tip(self, locale: str, tip: str):
        # A tip requested before a locale change is stale
        if locale != self.locale:
            return
        self.tip_label.setText(f"💡 {self.tr_('tip')}: {tip}")

    def closeEvent(self, event):
        for worker in self.tip_workers:
            worker.wait()
        self.clear_clipboard()
        event.accept()
