"""
File Change Store - In-memory per-task log of file operations performed by agent tools
"""

from __future__ import annotations

import logging
import threading
import time
import uuid

from models.changes import FileOperation, FileOperationEvent

logger = logging.getLogger(__name__)


class FileChangeStore:
    """Append-only event log per task, versioned so readers can cache"""

    _instance = None

    def __init__(self):
        self._lock = threading.Lock()
        self._events: dict[str, tuple[FileOperationEvent, ...]] = {}
        self._versions: dict[str, int] = {}

    @classmethod
    def get_instance(cls) -> "FileChangeStore":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = FileChangeStore()
        return cls._instance

    def add_change(
        self,
        task_id: str,
        file_path: str,
        operation: FileOperation | str,
        original_content: str | None = None,
        new_content: str | None = None,
        tool_id: str | None = None,
        timestamp: int | None = None,
    ) -> FileOperationEvent:
        """Record one file operation for a task"""
        with self._lock:
            events = self._events.get(task_id, ())
            if timestamp is None:
                timestamp = int(time.time() * 1000)
                # Keep arrival order when the clock has not moved
                if events and timestamp < events[-1].timestamp:
                    timestamp = events[-1].timestamp

            event = FileOperationEvent(
                tool_id=tool_id or str(uuid.uuid4()),
                file_path=file_path,
                operation=operation,
                timestamp=timestamp,
                original_content=original_content,
                new_content=new_content,
            )
            self._events[task_id] = events + (event,)
            self._versions[task_id] = self._versions.get(task_id, 0) + 1

        logger.debug("Recorded %s of %s for task %s", event.operation.value, file_path, task_id)
        return event

    def get_events(self, task_id: str) -> tuple[FileOperationEvent, ...]:
        """Snapshot of a task's event log"""
        with self._lock:
            return self._events.get(task_id, ())

    def get_version(self, task_id: str) -> int:
        """Counter that moves whenever the task's log changes"""
        with self._lock:
            return self._versions.get(task_id, 0)

    def snapshot(self, task_id: str) -> tuple[int, tuple[FileOperationEvent, ...]]:
        """Version and events read together"""
        with self._lock:
            return self._versions.get(task_id, 0), self._events.get(task_id, ())

    def clear_task(self, task_id: str):
        """Drop all recorded operations for a task"""
        with self._lock:
            self._events.pop(task_id, None)
            self._versions[task_id] = self._versions.get(task_id, 0) + 1
        logger.debug("Cleared file changes for task %s", task_id)
