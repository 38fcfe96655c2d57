"""File change tracking data models"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from .diff import DiffResult

logger = logging.getLogger(__name__)


class FileOperation(str, Enum):
    """Operation a tool performed on a file"""

    WRITE = "write"  # created or overwrote the file
    EDIT = "edit"  # in-place modification


class ChangeClassification(str, Enum):
    """Per-task verdict for a touched file"""

    NEW = "new"
    EDITED = "edited"


def _coerce_operation(value: Any) -> Any:
    if isinstance(value, FileOperation):
        return value
    try:
        return FileOperation(value)
    except ValueError:
        # Edit never hides a pre-existing file's history behind "New"
        logger.warning("Unrecognized file operation %r, treating as edit", value)
        return FileOperation.EDIT


class FileOperationEvent(BaseModel):
    """One tool invocation that touched a file"""

    model_config = ConfigDict(frozen=True)

    tool_id: str
    file_path: str
    operation: FileOperation
    timestamp: int  # milliseconds
    original_content: str | None = None  # snapshot before this operation
    new_content: str | None = None  # snapshot after this operation

    @field_validator("operation", mode="before")
    @classmethod
    def _known_operation(cls, value: Any) -> Any:
        return _coerce_operation(value)


class FileChangeRecord(BaseModel):
    """Net change to one file across a whole task"""

    model_config = ConfigDict(frozen=True)

    file_path: str
    classification: ChangeClassification
    first_original_content: str | None = None
    last_new_content: str | None = None
    operation_count: int = 1

    @computed_field
    @property
    def can_view_diff(self) -> bool:
        return (
            self.classification == ChangeClassification.EDITED
            and self.first_original_content is not None
            and self.last_new_content is not None
        )


class ChangeSummary(BaseModel):
    """Records for a task split into New/Edited buckets"""

    model_config = ConfigDict(frozen=True)

    task_id: str
    new_files: list[FileChangeRecord] = []
    edited_files: list[FileChangeRecord] = []

    @computed_field
    @property
    def total_files(self) -> int:
        return len(self.new_files) + len(self.edited_files)

    @computed_field
    @property
    def new_files_title(self) -> str:
        return f"New Files ({len(self.new_files)})"

    @computed_field
    @property
    def edited_files_title(self) -> str:
        return f"Edited Files ({len(self.edited_files)})"


class RecordChangeRequest(BaseModel):
    """Request to append an operation to a task's event log"""

    file_path: str
    operation: FileOperation
    original_content: str | None = None
    new_content: str | None = None
    tool_id: str | None = None
    timestamp: int | None = None

    @field_validator("operation", mode="before")
    @classmethod
    def _known_operation(cls, value: Any) -> Any:
        return _coerce_operation(value)


class FileDiffResponse(BaseModel):
    """Diff view for one file of a task"""

    file_path: str
    classification: ChangeClassification
    available: bool
    diff: DiffResult | None = None
