"""
Change Aggregator - Collapse a task's file operation log into one net change per file
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from models.changes import (
    ChangeClassification,
    ChangeSummary,
    FileChangeRecord,
    FileOperation,
    FileOperationEvent,
)
from services.file_change_store import FileChangeStore

logger = logging.getLogger(__name__)


def classify_first_event(event: FileOperationEvent) -> ChangeClassification:
    """New only when the task itself created the file"""
    if event.operation == FileOperation.WRITE and not event.original_content:
        return ChangeClassification.NEW
    return ChangeClassification.EDITED


def merge_events(file_path: str, events: list[FileOperationEvent]) -> FileChangeRecord:
    """Fold one path's events (oldest first) into its net change"""
    classification = None
    first_original = None
    last_new = None

    for event in events:
        if classification is None:
            classification = classify_first_event(event)
            first_original = event.original_content
        last_new = event.new_content

    return FileChangeRecord(
        file_path=file_path,
        classification=classification,
        first_original_content=first_original,
        last_new_content=last_new,
        operation_count=len(events),
    )


def aggregate_changes(events: Iterable[FileOperationEvent]) -> tuple[FileChangeRecord, ...]:
    """One record per path, in order of each path's first appearance in the log"""
    groups: dict[str, list[FileOperationEvent]] = {}
    for event in events:
        groups.setdefault(event.file_path, []).append(event)

    records = []
    for file_path, group in groups.items():
        # sorted() is stable: equal timestamps keep arrival order
        ordered = sorted(group, key=lambda e: e.timestamp)
        record = merge_events(file_path, ordered)
        if record.classification == ChangeClassification.EDITED and not record.can_view_diff:
            logger.warning("No content snapshots for edited file %s, diff unavailable", file_path)
        records.append(record)

    return tuple(records)


def summarize(task_id: str, records: Iterable[FileChangeRecord]) -> ChangeSummary:
    """Split records into New/Edited buckets"""
    new_files = []
    edited_files = []
    for record in records:
        if record.classification == ChangeClassification.NEW:
            new_files.append(record)
        else:
            edited_files.append(record)

    return ChangeSummary(task_id=task_id, new_files=new_files, edited_files=edited_files)


class ChangeAggregator:
    """Memoized aggregation over a FileChangeStore, keyed on the log version"""

    def __init__(self, store: FileChangeStore | None = None):
        self.store = store or FileChangeStore.get_instance()
        self._lock = threading.Lock()
        self._records: dict[str, tuple[int, tuple[FileChangeRecord, ...]]] = {}
        self._summaries: dict[str, tuple[int, ChangeSummary]] = {}

    def aggregate_task(self, task_id: str) -> tuple[FileChangeRecord, ...]:
        """Records for a task; the same object is returned until the log changes"""
        return self._versioned_records(task_id)[1]

    def summarize_task(self, task_id: str) -> ChangeSummary:
        """New/Edited summary for a task, cached alongside its records"""
        version, records = self._versioned_records(task_id)
        with self._lock:
            cached = self._summaries.get(task_id)
            if cached is not None and cached[0] == version:
                return cached[1]

        summary = summarize(task_id, records)
        with self._lock:
            self._summaries[task_id] = (version, summary)
        return summary

    def find_record(self, task_id: str, file_path: str) -> FileChangeRecord | None:
        """Net change for one path, or None if the task never touched it"""
        for record in self.aggregate_task(task_id):
            if record.file_path == file_path:
                return record
        return None

    def invalidate(self, task_id: str | None = None):
        """Drop cached results for one task, or for all tasks"""
        with self._lock:
            if task_id is None:
                self._records.clear()
                self._summaries.clear()
            else:
                self._records.pop(task_id, None)
                self._summaries.pop(task_id, None)

    def _versioned_records(self, task_id: str) -> tuple[int, tuple[FileChangeRecord, ...]]:
        version, events = self.store.snapshot(task_id)
        with self._lock:
            cached = self._records.get(task_id)
            if cached is not None and cached[0] == version:
                logger.debug("Change records cache hit for task %s (v%d)", task_id, version)
                return cached

        records = aggregate_changes(events)
        logger.debug(
            "Aggregated %d events into %d records for task %s (v%d)",
            len(events),
            len(records),
            task_id,
            version,
        )
        with self._lock:
            self._records[task_id] = (version, records)
        return version, records
