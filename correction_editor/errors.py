from __future__ import annotations


class CorrectionEditorError(Exception):
    """Base class for errors raised by correction_editor."""


class ResultFormatError(CorrectionEditorError, ValueError):
    """A proofreading result payload is structurally malformed."""


class PersistError(CorrectionEditorError, RuntimeError):
    """One or more status saves failed in the external sink."""

    def __init__(self, message: str, failures=None):
        super().__init__(message)
        self.failures = list(failures or [])
