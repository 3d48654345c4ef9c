import sys
import os
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

os.environ.setdefault("database_url", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.exceptions import NotFoundError, ValidationError
from app.database import get_session
from app.models.requirement import Requirement
from app.services import requirement_store


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
SQLModel.metadata.create_all(engine)


def override_get_session():
    with Session(engine) as session:
        yield session


def reset_database():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    app.dependency_overrides[get_session] = override_get_session
    client = TestClient(app)
    created = client.post(
        "/api/requirements/",
        json={"customer": "Acme", "details": "Need 500 units", "type": "Bulk Purchase"},
    )
    return client, created.json()


def test_append_comments_in_call_order():
    client, created = reset_database()
    rid = created["id"]

    first = client.post(f"/api/requirements/{rid}/comments", json={"text": "Shipped today"})
    assert first.status_code == 200
    second = client.post(
        f"/api/requirements/{rid}/comments",
        json={"text": "", "images": ["img1.png"], "videos": []},
    )
    assert second.status_code == 200

    data = second.json()
    assert data["id"] == rid
    assert [c["text"] for c in data["comments"]] == ["Shipped today", ""]
    assert data["comments"][1]["images"] == ["img1.png"]
    assert data["comments"][1]["videos"] == []
    assert data["last_comment_at"] == data["comments"][-1]["timestamp"]
    assert data["updated_at"] == data["last_comment_at"]
    assert data["comments"][0]["timestamp"] == first.json()["last_comment_at"]
    assert data["created_at"] == created["created_at"]

    app.dependency_overrides.clear()


def test_append_video_only_comment():
    client, created = reset_database()

    response = client.post(
        f"/api/requirements/{created['id']}/comments", json={"videos": ["unboxing.mp4"]}
    )
    assert response.status_code == 200
    comment = response.json()["comments"][0]
    assert comment["text"] == ""
    assert comment["images"] == []
    assert comment["videos"] == ["unboxing.mp4"]

    app.dependency_overrides.clear()


def test_append_empty_comment_rejected_and_store_unchanged():
    client, created = reset_database()
    rid = created["id"]

    for payload in ({"text": "", "images": [], "videos": []}, {}, {"text": "   "}):
        response = client.post(f"/api/requirements/{rid}/comments", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"] == "Comment text or media is required"

    with Session(engine) as session:
        stored = session.get(Requirement, rid)
        assert stored.comments == []
        assert stored.last_comment_at is None
        assert stored.updated_at == stored.created_at

    app.dependency_overrides.clear()


def test_append_comment_not_found():
    client, created = reset_database()

    response = client.post("/api/requirements/999/comments", json={"text": "hello"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Requirement not found"

    app.dependency_overrides.clear()


def test_service_append_validation_runs_before_lookup():
    reset_database()

    with Session(engine) as session:
        with pytest.raises(ValidationError):
            requirement_store.append_comment(session, 999, text="")
        with pytest.raises(NotFoundError):
            requirement_store.append_comment(session, 999, text="hello")

    app.dependency_overrides.clear()


def test_service_lifecycle_timestamps():
    reset_database()

    with Session(engine) as session:
        requirement = requirement_store.create_requirement(
            session, "Initech", None, "Red staplers", "Special Order"
        )
        assert requirement.created_at == requirement.updated_at
        assert requirement.created_at.utcoffset() == timedelta(0)
        assert requirement.last_comment_at is None
        assert requirement.status == "Pending"

        texts = ["one", "two", "three"]
        for text in texts:
            requirement = requirement_store.append_comment(session, requirement.id, text=text)

        assert [c["text"] for c in requirement.comments] == texts
        assert requirement.last_comment_at.isoformat() == requirement.comments[-1]["timestamp"]
        assert requirement.updated_at == requirement.last_comment_at
        assert requirement.updated_at >= requirement.created_at

    app.dependency_overrides.clear()


def test_delete_drops_append_lock():
    reset_database()

    with Session(engine) as session:
        requirement = requirement_store.create_requirement(
            session, "Initech", None, "Red staplers", "Special Order"
        )
        rid = requirement.id
        requirement_store.append_comment(session, rid, text="hello")
        assert rid in requirement_store.append_locks

        requirement_store.delete_requirement(session, rid)
        assert rid not in requirement_store.append_locks
        with pytest.raises(NotFoundError):
            requirement_store.delete_requirement(session, rid)

    app.dependency_overrides.clear()


def test_concurrent_appends_do_not_lose_updates(tmp_path):
    file_engine = create_engine(
        f"sqlite:///{tmp_path / 'requirements.db'}",
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(file_engine)

    with Session(file_engine) as session:
        rid = requirement_store.create_requirement(
            session, "Umbrella", "", "Bulk gloves", "Bulk Purchase"
        ).id

    errors = []

    def worker(n):
        try:
            with Session(file_engine) as session:
                requirement_store.append_comment(session, rid, text=f"note {n}")
        except Exception as exc:  # pragma: no cover - se reporta abajo
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    with Session(file_engine) as session:
        stored = session.get(Requirement, rid)
        assert sorted(c["text"] for c in stored.comments) == sorted(f"note {n}" for n in range(8))
        assert stored.last_comment_at.isoformat() == stored.comments[-1]["timestamp"]

    file_engine.dispose()


def test_append_to_missing_requirement_leaves_no_lock():
    client, created = reset_database()
    before = len(requirement_store.append_locks)

    for missing_id in range(1000, 1010):
        response = client.post(f"/api/requirements/{missing_id}/comments", json={"text": "hello"})
        assert response.status_code == 404
        assert missing_id not in requirement_store.append_locks

    assert len(requirement_store.append_locks) == before

    app.dependency_overrides.clear()


def test_initial_comment_timestamps_normalized_to_utc():
    reset_database()

    with Session(engine) as session:
        requirement = requirement_store.create_requirement(
            session,
            "Initech",
            None,
            "Red staplers",
            "Special Order",
            comments=[
                {"text": "imported", "timestamp": "2026-03-01T10:00:00Z"},
                {"text": "local", "timestamp": datetime(2026, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))},
                {"text": "naive", "timestamp": datetime(2026, 3, 1, 10, 0)},
            ],
        )
        assert [c["timestamp"] for c in requirement.comments] == ["2026-03-01T10:00:00+00:00"] * 3

        with pytest.raises(ValidationError):
            requirement_store.create_requirement(
                session,
                "Initech",
                None,
                "Red staplers",
                "Special Order",
                comments=[{"text": "x", "timestamp": "yesterday"}],
            )

    app.dependency_overrides.clear()
