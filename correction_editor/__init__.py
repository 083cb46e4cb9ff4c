"""
Correction-state engine for proofreading results.

A result is a list of sentences, each carrying token-level transformations
proposed by the proofreading service. The engine groups overlapping
transformations, tracks which of them apply to the live text and lets a
user accept, reject and undo them.
"""
from correction_editor.config import EditorConfig, load_config
from correction_editor.errors import CorrectionEditorError, PersistError, ResultFormatError
from correction_editor.ir import (
    ALL_RESPONSE_TYPES,
    DocumentResult,
    Finding,
    Sentence,
    Token,
    Transformation,
    TRANSFORM_STATUS_ACCEPTED,
    TRANSFORM_STATUS_CLEAN,
    TRANSFORM_STATUS_REJECTED,
)
from correction_editor.metadata import set_metadata
from correction_editor.offsets import NOT_FOUND
from correction_editor.persist import StatusPersister, StatusRecord, StatusSink
from correction_editor.session import InteractiveEditor

__all__ = [
    "ALL_RESPONSE_TYPES",
    "CorrectionEditorError",
    "DocumentResult",
    "EditorConfig",
    "Finding",
    "InteractiveEditor",
    "NOT_FOUND",
    "PersistError",
    "ResultFormatError",
    "Sentence",
    "StatusPersister",
    "StatusRecord",
    "StatusSink",
    "Token",
    "Transformation",
    "TRANSFORM_STATUS_ACCEPTED",
    "TRANSFORM_STATUS_CLEAN",
    "TRANSFORM_STATUS_REJECTED",
    "load_config",
    "set_metadata",
]
