# -*- coding: utf-8 -*-
"""
LangKeeper Session Controller

Collaborator-facing surface of one extraction session:
- Starting a session on a usage file (extract usages + parse the locale table)
- Editing the working table and the usage list
- Saving the pending diff back to disk and reloading
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from langkeeper_enums import Locale
from langkeeper_exceptions import (
    FileOperationError, KeyExists, LangKeeperError, MissingPath,
    NotFound, ParseFailure, PatchError, UnknownModeError,
)
from langkeeper_logger import get_logger
from locales import tr
from models.locale_table import LocaleTable, UsageRecord
from models.session_model import SessionModel
from core.dialects import DIALECTS, Dialect, get_dialect

logger = get_logger("controllers.session")


@dataclass
class SessionView:
    """What the UI shows after every operation."""
    usages: List[UsageRecord] = field(default_factory=list)
    table: Optional[LocaleTable] = None
    usage_file: Optional[Path] = None
    table_paths: Dict[Locale, Path] = field(default_factory=dict)
    dirty: bool = False


class SessionController(QObject):
    """
    Controller for the active extraction session.

    Failures never propagate out of this class: they are logged, reported
    through `session_error` and kept in `last_error`, and the session state
    stays as it was.

    Signals:
        session_started(SessionView): Emitted after a session is opened
        session_changed(SessionView): Emitted after any in-memory change or reload
        session_saved(list): Emitted with the rewritten file paths after a save
        session_error(str): Emitted with a human-readable report
        status_message(str): Emitted with short progress messages
    """

    session_started = pyqtSignal(object)  # SessionView
    session_changed = pyqtSignal(object)  # SessionView
    session_saved = pyqtSignal(list)  # [str]
    session_error = pyqtSignal(str)  # message
    status_message = pyqtSignal(str)  # message

    def __init__(self, settings: Optional[dict] = None):
        """
        Initialize the session controller.

        Args:
            settings: Loaded settings (langkeeper_settings.load_settings)
        """
        super().__init__()
        self._settings = settings or {}
        self._dialect: Optional[Dialect] = None
        self._model: Optional[SessionModel] = None
        self._usage_file: Optional[Path] = None
        self._table_paths: Dict[Locale, Path] = {}
        self.last_error: Optional[LangKeeperError] = None

        logger.debug("SessionController initialized")

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def dialect(self) -> Optional[Dialect]:
        return self._dialect

    @property
    def model(self) -> Optional[SessionModel]:
        return self._model

    @property
    def is_active(self) -> bool:
        return self._model is not None and self._model.is_loaded

    def view(self) -> SessionView:
        if not self.is_active:
            return SessionView()
        return SessionView(
            usages=self._model.usages,
            table=self._model.table,
            usage_file=self._usage_file,
            table_paths=dict(self._table_paths),
            dirty=self._model.has_changes(),
        )

    # =========================================================================
    # SESSION LIFECYCLE
    # =========================================================================

    def start_session(self, usage_file, mode: Optional[str] = None) -> Optional[SessionView]:
        """
        Open a session on a usage file.

        Extraction and table problems are reported but do not prevent the
        session from starting (a usage file without a table yet is normal).

        Args:
            usage_file: Source file to extract usages from
            mode: Dialect name, or None for the configured default

        Returns:
            SessionView, or None if the mode is unknown
        """
        try:
            dialect = get_dialect(mode, self._settings)
        except UnknownModeError as e:
            self._report(e)
            return None

        path = Path(usage_file)
        table_paths = dialect.table_paths(path)
        usages, table = self._load(dialect, path, table_paths)

        self._dialect = dialect
        self._usage_file = path
        self._table_paths = table_paths
        self._model = SessionModel(
            placeholder_policy=dialect.placeholder_policy,
            placeholder_suffixes=dialect.placeholder_suffixes,
        )
        self._model.load(usages, table)
        self.last_error = None

        logger.info(f"Session started: {path.name} ({dialect.name}), {len(usages)} usages, {len(table)} entries")
        self.status_message.emit(tr("status_session_started", usages=len(usages), path=path.name, entries=len(table)))
        view = self.view()
        self.session_started.emit(view)
        return view

    def reload(self) -> Optional[SessionView]:
        """Re-run extraction and parsing from disk, discarding unsaved edits."""
        if not self.is_active:
            self._report(NotFound("No active session"))
            return None
        usages, table = self._load(self._dialect, self._usage_file, self._table_paths)
        self._model.reload(usages, table)
        self.status_message.emit(tr("status_refreshed"))
        return self._changed()

    def _load(self, dialect: Dialect, usage_file: Path, table_paths: Dict[Locale, Path]):
        problems: List[LangKeeperError] = []
        usages = dialect.extract_usages(usage_file, problems)
        table = dialect.parse_table(table_paths, problems)
        for problem in problems:
            self._report(problem)
        return usages, table

    # =========================================================================
    # MUTATORS
    # =========================================================================

    def edit_entry(self, key: str, locale, value: str) -> Optional[SessionView]:
        """Set one locale value of an existing entry."""
        target = self._resolve_locale(locale)
        if target is None:
            return None
        if not self._apply("edit_entry", key, target, value):
            return None
        self.status_message.emit(tr("status_entry_updated", key=key, locale=target.value))
        return self._changed()

    def add_entry(self, key: str, values: Optional[Dict] = None) -> Optional[SessionView]:
        """Add an entry directly to the working table."""
        resolved = {}
        for locale, value in (values or {}).items():
            target = self._resolve_locale(locale)
            if target is None:
                return None
            resolved[target] = value
        if not self._apply("add_entry", key, resolved):
            return None
        self.status_message.emit(tr("status_entry_added", key=key))
        return self._changed()

    def delete_usage(self, key: str) -> Optional[SessionView]:
        if not self._apply("delete_usage", key):
            return None
        self.status_message.emit(tr("status_usage_deleted", key=key))
        return self._changed()

    def delete_locale_entry(self, key: str) -> Optional[SessionView]:
        if not self._apply("delete_locale_entry", key):
            return None
        self.status_message.emit(tr("status_entry_deleted", key=key))
        return self._changed()

    def merge_usages_into_table(self) -> Optional[SessionView]:
        """Seed placeholder entries for used keys the table lacks."""
        if not self.is_active:
            self._report(NotFound("No active session"))
            return None
        added = self._model.merge_usages_into_table()
        self.status_message.emit(tr("status_merge_done", count=added))
        return self._changed()

    def _apply(self, operation: str, *args) -> bool:
        if not self.is_active:
            self._report(NotFound("No active session"))
            return False
        try:
            getattr(self._model, operation)(*args)
        except LangKeeperError as e:
            self._report(e)
            return False
        return True

    def _resolve_locale(self, locale) -> Optional[Locale]:
        try:
            return Locale(locale)
        except ValueError:
            message = tr("error_unknown_locale", locale=locale, locales=", ".join(l.value for l in Locale))
            logger.warning(message)
            self.session_error.emit(message)
            return None

    # =========================================================================
    # SAVE
    # =========================================================================

    def save(self) -> bool:
        """
        Write the pending diff to the table file(s) and reload on success.

        On failure nothing is reloaded, so the snapshot still describes what
        was on disk before and the edits remain pending.

        Returns:
            True if the table on disk now matches the working table
        """
        if not self.is_active or not self._table_paths:
            self._report(MissingPath("No locale table path; start a session first"))
            return False

        result = self._model.pending_diff()
        if result.is_empty():
            self.status_message.emit(tr("status_nothing_to_save"))
            return True

        try:
            written = self._dialect.write_table(result, self._table_paths)
        except LangKeeperError as e:
            self._report(e, saving=True)
            return False

        self.reload()
        paths = [str(p) for p in written]
        self.status_message.emit(tr("status_save_success", paths=", ".join(Path(p).name for p in paths)))
        self.session_saved.emit(paths)
        return True

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _changed(self) -> SessionView:
        view = self.view()
        self.session_changed.emit(view)
        return view

    def _report(self, error: LangKeeperError, saving: bool = False):
        self.last_error = error
        message = self.describe(error, saving)
        logger.warning(message)
        self.session_error.emit(message)

    @staticmethod
    def describe(error: LangKeeperError, saving: bool = False) -> str:
        """Human-readable report for an error."""
        if isinstance(error, UnknownModeError):
            return tr("error_unknown_mode", mode=error.mode, modes=", ".join(DIALECTS))
        if isinstance(error, MissingPath):
            return tr("error_missing_path")
        if isinstance(error, NotFound):
            return tr("error_not_found", key=error.key) if error.key is not None else tr("error_no_session")
        if isinstance(error, KeyExists):
            return tr("error_key_exists", key=error.key)
        if saving or isinstance(error, PatchError):
            return tr("error_save_failed", error=error.message)
        if isinstance(error, FileOperationError) and error.operation == "find":
            return tr("error_file_not_found", path=error.file_path)
        if isinstance(error, (ParseFailure, FileOperationError)):
            return tr("error_parse_failed", error=error.message)
        return error.message
