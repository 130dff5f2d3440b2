"""Shared pytest fixtures for the planboard test suite.

Design philosophy
-----------------
- Nothing touches the network or the real filesystem state directory: the
  REST collaborator is a small FastAPI app served through
  ``httpx.ASGITransport`` and snapshots live in memory or ``tmp_path``.
- Fixtures are async where the SUT is async.
- Scope is "function" everywhere so every test starts from the same data.
"""
from __future__ import annotations

import asyncio
from datetime import date
from typing import Any

import httpx
import pytest
from fastapi import Body, FastAPI, HTTPException, Response

from planboard.core.config import PlanboardConfig
from planboard.core.types import Dataset, Phase, Project, Task, TaskStatus, TeamMember
from planboard.storage.local import LocalTaskStore
from planboard.storage.remote import RemoteTaskStore
from planboard.storage.snapshot import InMemorySnapshotBackend

API_BASE = "http://testserver/api"
SNAPSHOT_KEY = "planboard.snapshot"


# ---------------------------------------------------------------------------
# Event loop: one policy per test session (required by pytest-asyncio)
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def event_loop_policy():
    return asyncio.DefaultEventLoopPolicy()


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------

@pytest.fixture
def projects() -> tuple[Project, ...]:
    return (
        Project(id=1, name="Launch Film"),
        Project(id=2, name="Training Series"),
    )


@pytest.fixture
def phases() -> tuple[Phase, ...]:
    return (
        Phase(id=10, name="Pre-Production", order=1),
        Phase(id=20, name="Production", order=2),
        Phase(id=30, name="Post-Production", order=3),
    )


@pytest.fixture
def members() -> tuple[TeamMember, ...]:
    return (
        TeamMember(id=1, name="Ana Ortiz", avatar_color="#123456"),
        TeamMember(id=2, name="ben Holt", avatar_color=None),
    )


def make_task(task_id: int, **overrides: Any) -> Task:
    fields: dict[str, Any] = dict(
        id=task_id,
        task_code=f"T-{task_id:03d}",
        name=f"Task {task_id}",
        phase_id=10,
        status=TaskStatus.OPEN,
        owner_id=1,
        start_date=date(2026, 1, 8),
        end_date=date(2026, 1, 12),
        duration=5,
        project_id=1,
        phase_name="Pre-Production",
        owner_name="Ana Ortiz",
        avatar_color="#123456",
    )
    fields.update(overrides)
    return Task(**fields)


@pytest.fixture
def tasks() -> tuple[Task, ...]:
    return (
        make_task(1, status=TaskStatus.DONE),
        make_task(
            2,
            phase_id=20,
            phase_name="Production",
            status=TaskStatus.IN_PROGRESS,
            owner_id=2,
            owner_name="ben Holt",
            avatar_color=None,
            start_date=date(2026, 1, 15),
            end_date=date(2026, 1, 28),
            duration=14,
        ),
        make_task(3, status=TaskStatus.OPEN),
        make_task(
            4,
            phase_id=30,
            phase_name="Post-Production",
            status=TaskStatus.TESTING,
            project_id=2,
        ),
    )


@pytest.fixture
def dataset(projects, phases, members, tasks) -> Dataset:
    return Dataset(projects=projects, phases=phases, team_members=members, tasks=tasks)


# ---------------------------------------------------------------------------
# Configuration and snapshot backends
# ---------------------------------------------------------------------------

@pytest.fixture
def config(tmp_path) -> PlanboardConfig:
    return PlanboardConfig(
        api_base_url=API_BASE,
        snapshot_backend="memory",
        snapshot_key=SNAPSHOT_KEY,
        snapshot_dir=tmp_path,
        notice_ttl_seconds=3.0,
    )


@pytest.fixture
def snapshot_backend() -> InMemorySnapshotBackend:
    return InMemorySnapshotBackend()


class IdClock:
    """Deterministic id source: returns *value* and counts calls."""

    def __init__(self, value: int = 1_000) -> None:
        self.value = value
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        return self.value


@pytest.fixture
def id_clock() -> IdClock:
    return IdClock()


@pytest.fixture
def local_store(dataset, snapshot_backend, id_clock) -> LocalTaskStore:
    return LocalTaskStore(
        dataset,
        backend=snapshot_backend,
        key=SNAPSHOT_KEY,
        selected_project=1,
        id_clock=id_clock,
    )


# ---------------------------------------------------------------------------
# Fake REST API
# ---------------------------------------------------------------------------

def make_fake_api(dataset: Dataset) -> FastAPI:
    """In-process stand-in for the task REST API.

    Knobs on ``app.state``:
    - ``down``: collection names whose GET answers 503
    - ``fail_writes``: every POST/PUT/DELETE answers 500
    - ``requests``: ``(method, path)`` of every request received
    """
    app = FastAPI()
    db: dict[str, list[dict[str, Any]]] = {
        "projects": [p.model_dump(mode="json") for p in dataset.projects],
        "tasks": [t.model_dump(mode="json") for t in dataset.tasks],
        "phases": [p.model_dump(mode="json") for p in dataset.phases],
        "team-members": [m.model_dump(mode="json") for m in dataset.team_members],
    }
    app.state.db = db
    app.state.down = set()
    app.state.fail_writes = False
    app.state.requests = []

    def _denormalize(row: dict[str, Any]) -> dict[str, Any]:
        phase = next((p for p in db["phases"] if p["id"] == row.get("phase_id")), None)
        owner = next((m for m in db["team-members"] if m["id"] == row.get("owner_id")), None)
        return {
            **row,
            "phase_name": phase["name"] if phase else None,
            "owner_name": owner["name"] if owner else None,
            "avatar_color": owner["avatar_color"] if owner else None,
        }

    def _check_writable() -> None:
        if app.state.fail_writes:
            raise HTTPException(status_code=500, detail="database unavailable")

    @app.middleware("http")
    async def record_requests(request, call_next):
        app.state.requests.append((request.method, request.url.path))
        return await call_next(request)

    @app.get("/api/{collection}")
    async def list_collection(collection: str):
        if collection in app.state.down:
            raise HTTPException(status_code=503, detail="unavailable")
        if collection not in db:
            raise HTTPException(status_code=404, detail="no such collection")
        return db[collection]

    @app.post("/api/tasks", status_code=201)
    async def create_task(body: dict[str, Any] = Body(...)):
        _check_writable()
        new_id = max((t["id"] for t in db["tasks"]), default=0) + 1
        row = _denormalize({**body, "id": new_id})
        db["tasks"].append(row)
        return row

    @app.put("/api/tasks/{task_id}")
    async def update_task(task_id: int, body: dict[str, Any] = Body(...)):
        _check_writable()
        for i, existing in enumerate(db["tasks"]):
            if existing["id"] == task_id:
                row = _denormalize({**body, "id": task_id})
                db["tasks"][i] = row
                return row
        raise HTTPException(status_code=404, detail="task not found")

    @app.delete("/api/tasks/{task_id}")
    async def delete_task(task_id: int):
        _check_writable()
        remaining = [t for t in db["tasks"] if t["id"] != task_id]
        if len(remaining) == len(db["tasks"]):
            raise HTTPException(status_code=404, detail="task not found")
        db["tasks"][:] = remaining
        return Response(status_code=204)

    return app


@pytest.fixture
def fake_api(dataset) -> FastAPI:
    return make_fake_api(dataset)


@pytest.fixture
async def api_client(fake_api):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=fake_api),
        base_url=API_BASE,
    ) as client:
        yield client


@pytest.fixture
def remote_store(api_client) -> RemoteTaskStore:
    return RemoteTaskStore(API_BASE, client=api_client)


@pytest.fixture
def task_factory():
    return make_task
