"""Tests for the change review and config HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def client(isolated_backend):
    return TestClient(app)


def record(client, task_id, **body):
    response = client.post(f"/api/changes/{task_id}/events", json=body)
    assert response.status_code == 200
    return response.json()


class TestChangesEndpoints:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_empty_task(self, client):
        data = client.get("/api/changes/task-empty").json()
        assert data["total_files"] == 0
        assert data["new_files"] == []
        assert data["edited_files"] == []

    def test_new_file_has_no_diff(self, client):
        record(client, "task-a", file_path="module.a", operation="write", original_content="", new_content="hello")

        data = client.get("/api/changes/task-a").json()
        assert data["new_files_title"] == "New Files (1)"
        assert data["edited_files_title"] == "Edited Files (0)"
        assert data["new_files"][0]["can_view_diff"] is False

        diff = client.get("/api/changes/task-a/diff", params={"file_path": "module.a"}).json()
        assert diff["classification"] == "new"
        assert diff["available"] is False
        assert diff["diff"] is None

    def test_edited_file_diff(self, client):
        record(
            client,
            "task-b",
            file_path="module.b",
            operation="edit",
            original_content="line1\nline2\nline3",
            new_content="line1\nCHANGED\nline3",
        )

        data = client.get("/api/changes/task-b/diff", params={"file_path": "module.b"}).json()
        assert data["available"] is True
        lines = data["diff"]["lines"]
        assert [(line["type"], line["content"]) for line in lines] == [
            ("context", "line1"),
            ("removed", "line2"),
            ("added", "CHANGED"),
            ("context", "line3"),
        ]
        assert data["diff"]["has_changes"] is True

    def test_merged_edits(self, client):
        for i, (old, new) in enumerate([("v0", "v1"), ("v1", "v2"), ("v2", "v3")]):
            record(client, "task-m", file_path="f.py", operation="edit",
                   original_content=old, new_content=new, timestamp=i)

        data = client.get("/api/changes/task-m").json()
        assert data["total_files"] == 1
        edited = data["edited_files"][0]
        assert edited["first_original_content"] == "v0"
        assert edited["last_new_content"] == "v3"

    def test_edit_without_snapshots_is_degraded(self, client):
        record(client, "task-d", file_path="f.py", operation="edit")

        data = client.get("/api/changes/task-d").json()
        assert data["edited_files_title"] == "Edited Files (1)"

        diff = client.get("/api/changes/task-d/diff", params={"file_path": "f.py"}).json()
        assert diff["available"] is False

    def test_unknown_operation_is_recorded_as_edit(self, client):
        stored = record(client, "task-u", file_path="f.py", operation="rename",
                        original_content="", new_content="x")
        assert stored["operation"] == "edit"

    def test_unknown_path_is_404(self, client):
        response = client.get("/api/changes/task-x/diff", params={"file_path": "nope.py"})
        assert response.status_code == 404

    def test_clear_task(self, client):
        record(client, "task-c", file_path="f.py", operation="write", original_content="", new_content="x")
        assert client.delete("/api/changes/task-c").status_code == 200
        assert client.get("/api/changes/task-c").json()["total_files"] == 0


class TestConfigEndpoints:
    def test_defaults(self, client):
        data = client.get("/api/config").json()
        assert data["contextLines"] == 3
        assert data["noChangesMessage"].startswith("No changes detected")

    def test_update_context_lines_changes_diff(self, client):
        assert client.put("/api/config", json={"contextLines": 0}).status_code == 200
        assert client.get("/api/config").json()["contextLines"] == 0

        record(
            client,
            "task-cfg",
            file_path="f.py",
            operation="edit",
            original_content="a\nb\nc",
            new_content="a\nB\nc",
        )
        lines = client.get("/api/changes/task-cfg/diff", params={"file_path": "f.py"}).json()["diff"]["lines"]
        assert [line["content"] for line in lines] == ["b", "B", "..."]

    def test_negative_context_lines_rejected(self, client):
        assert client.put("/api/config", json={"contextLines": -1}).status_code == 422

    def test_config_written_to_config_dir(self, client, isolated_backend):
        client.put("/api/config", json={"noChangesMessage": "Nothing here"})
        assert (isolated_backend / "config" / "config.json").exists()
