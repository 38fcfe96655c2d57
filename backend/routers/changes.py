"""File change review API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from models.changes import (
    ChangeSummary,
    FileDiffResponse,
    FileOperationEvent,
    RecordChangeRequest,
)
from services.change_aggregator import ChangeAggregator
from services.config_manager import ConfigManager
from services.diff_generator import DiffGenerator
from services.file_change_store import FileChangeStore

router = APIRouter()

_aggregator: ChangeAggregator | None = None


def get_aggregator() -> ChangeAggregator:
    """Aggregator bound to the process-wide change store"""
    global _aggregator
    store = FileChangeStore.get_instance()
    if _aggregator is None or _aggregator.store is not store:
        _aggregator = ChangeAggregator(store)
    return _aggregator


def build_diff_generator() -> DiffGenerator:
    """Diff generator using the current diff settings"""
    settings = ConfigManager.get_instance().get_diff_settings()
    return DiffGenerator(
        context_lines=settings["contextLines"],
        no_changes_message=settings["noChangesMessage"],
    )


@router.post("/{task_id}/events", response_model=FileOperationEvent)
def record_change(task_id: str, request: RecordChangeRequest) -> FileOperationEvent:
    """Append a file operation to the task's log"""
    return FileChangeStore.get_instance().add_change(
        task_id,
        request.file_path,
        request.operation,
        original_content=request.original_content,
        new_content=request.new_content,
        tool_id=request.tool_id,
        timestamp=request.timestamp,
    )


@router.get("/{task_id}", response_model=ChangeSummary)
def get_changes(task_id: str) -> ChangeSummary:
    """Files created and edited during a task"""
    return get_aggregator().summarize_task(task_id)


@router.get("/{task_id}/diff", response_model=FileDiffResponse)
def get_file_diff(task_id: str, file_path: str) -> FileDiffResponse:
    """Net diff for one edited file of a task"""
    record = get_aggregator().find_record(task_id, file_path)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No changes recorded for {file_path}")

    if not record.can_view_diff:
        return FileDiffResponse(
            file_path=file_path,
            classification=record.classification,
            available=False,
        )

    diff = build_diff_generator().generate_diff(
        record.first_original_content,
        record.last_new_content,
        file_path,
    )
    return FileDiffResponse(
        file_path=file_path,
        classification=record.classification,
        available=True,
        diff=diff,
    )


@router.delete("/{task_id}")
def clear_changes(task_id: str) -> dict[str, Any]:
    """Forget all recorded operations for a task"""
    FileChangeStore.get_instance().clear_task(task_id)
    return {"status": "success", "message": f"Cleared changes for task {task_id}"}
