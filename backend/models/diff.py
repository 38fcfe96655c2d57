"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field

ELLIPSIS = "..."


class DiffLineType(str, Enum):
    """Kinds of lines in a rendered diff"""

    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"
    CONTEXT = "context"


class DiffLine(BaseModel):
    """A single line of a diff view"""

    model_config = ConfigDict(frozen=True)

    type: DiffLineType
    content: str
    original_line_number: int | None = None  # 1-indexed
    new_line_number: int | None = None  # 1-indexed

    @property
    def is_change(self) -> bool:
        return self.type in (DiffLineType.ADDED, DiffLineType.REMOVED)

    @property
    def is_ellipsis(self) -> bool:
        """Marker standing in for omitted unchanged lines"""
        return (
            self.type == DiffLineType.CONTEXT
            and self.content == ELLIPSIS
            and self.original_line_number is None
            and self.new_line_number is None
        )


class DiffResult(BaseModel):
    """Complete diff result for a file"""

    model_config = ConfigDict(frozen=True)

    file_path: str
    lines: list[DiffLine]  # context-compressed
    added_count: int = 0
    removed_count: int = 0

    @computed_field
    @property
    def has_changes(self) -> bool:
        return self.added_count > 0 or self.removed_count > 0
