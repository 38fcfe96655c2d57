"""Models module - Pydantic data models"""

from .changes import (
    ChangeClassification,
    ChangeSummary,
    FileChangeRecord,
    FileDiffResponse,
    FileOperation,
    FileOperationEvent,
    RecordChangeRequest,
)
from .diff import DiffLine, DiffLineType, DiffResult

__all__ = [
    # Change models
    "ChangeClassification",
    "ChangeSummary",
    "FileChangeRecord",
    "FileDiffResponse",
    "FileOperation",
    "FileOperationEvent",
    "RecordChangeRequest",
    # Diff models
    "DiffLine",
    "DiffLineType",
    "DiffResult",
]
