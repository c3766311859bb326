# -*- coding: utf-8 -*-
"""
LangKeeper Exceptions Module
Custom exception classes for structured error handling across the application.
"""


class LangKeeperError(Exception):
    """
    Base exception class for all LangKeeper-related errors.

    Attributes:
        message: Human-readable error message
        details: Optional additional details (dict, string, etc.)
    """

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Parser Exceptions
# =============================================================================

class ParserError(LangKeeperError):
    """Base exception for parser-related errors."""
    pass


class ParseFailure(ParserError):
    """Raised when a file exists but cannot be parsed in the expected dialect or shape."""

    def __init__(self, message: str, file_path: str = None, line_number: int = None):
        super().__init__(message, details={'file_path': file_path, 'line_number': line_number})
        self.file_path = file_path
        self.line_number = line_number


# =============================================================================
# Session Exceptions
# =============================================================================

class SessionError(LangKeeperError):
    """Base exception for session model errors."""
    pass


class NotFound(SessionError):
    """Raised when an operation references a key that is not in the working table."""

    def __init__(self, message: str, key: str = None):
        super().__init__(message, details={'key': key})
        self.key = key


class KeyExists(SessionError):
    """Raised when adding an entry whose key is already in the working table."""

    def __init__(self, message: str, key: str = None):
        super().__init__(message, details={'key': key})
        self.key = key


# =============================================================================
# Patch Exceptions
# =============================================================================

class PatchError(LangKeeperError):
    """Base exception for errors while writing a diff back to disk."""
    pass


class MissingPath(PatchError):
    """Raised when a save is attempted without a resolved table path."""
    pass


class WriteFailure(PatchError):
    """Raised when a table file cannot be written."""

    def __init__(self, message: str, file_path: str = None):
        super().__init__(message, details={'file_path': file_path})
        self.file_path = file_path


# =============================================================================
# Core/File Exceptions
# =============================================================================

class CoreError(LangKeeperError):
    """Base exception for core module errors."""
    pass


class FileOperationError(CoreError):
    """Raised when a file operation (read/write) fails."""

    def __init__(self, message: str, file_path: str = None, operation: str = None):
        super().__init__(message, details={'file_path': file_path, 'operation': operation})
        self.file_path = file_path
        self.operation = operation


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(LangKeeperError):
    """Base exception for configuration errors."""
    pass


class UnknownModeError(ConfigError):
    """Raised when a mode name does not match any known dialect."""

    def __init__(self, message: str, mode: str = None):
        super().__init__(message, details={'mode': mode})
        self.mode = mode


# =============================================================================
# Settings Exceptions
# =============================================================================

class SettingsError(LangKeeperError):
    """Base exception for settings-related errors."""
    pass


class SettingsSaveError(SettingsError):
    """Raised when saving settings fails."""
    pass
