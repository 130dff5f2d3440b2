"""Snapshot backends (memory, file) and load/save helpers."""
from __future__ import annotations

import pytest

from planboard.core.exceptions import DataLoadError, SnapshotError
from planboard.core.types import Snapshot
from planboard.storage.snapshot import (
    FileSnapshotBackend,
    InMemorySnapshotBackend,
    load_snapshot,
    save_snapshot,
)

KEY = "planboard.snapshot"


class TestInMemoryBackend:

    @pytest.mark.asyncio
    async def test_read_absent(self) -> None:
        assert await InMemorySnapshotBackend().read(KEY) is None

    @pytest.mark.asyncio
    async def test_write_read_clear(self) -> None:
        backend = InMemorySnapshotBackend()
        await backend.write(KEY, "{}")
        assert await backend.read(KEY) == "{}"
        assert backend.keys() == [KEY]
        await backend.clear(KEY)
        assert await backend.read(KEY) is None

    @pytest.mark.asyncio
    async def test_clear_absent_is_noop(self) -> None:
        await InMemorySnapshotBackend().clear(KEY)


class TestFileBackend:

    @pytest.mark.asyncio
    async def test_read_absent(self, tmp_path) -> None:
        assert await FileSnapshotBackend(tmp_path).read(KEY) is None

    @pytest.mark.asyncio
    async def test_write_creates_directory(self, tmp_path) -> None:
        backend = FileSnapshotBackend(tmp_path / "state" / "planboard")
        await backend.write(KEY, '{"projects": []}')
        assert backend.path_for(KEY).read_text(encoding="utf-8") == '{"projects": []}'
        assert await backend.read(KEY) == '{"projects": []}'

    @pytest.mark.asyncio
    async def test_overwrite_leaves_no_temp_file(self, tmp_path) -> None:
        backend = FileSnapshotBackend(tmp_path)
        await backend.write(KEY, "one")
        await backend.write(KEY, "two")
        assert await backend.read(KEY) == "two"
        assert [p.name for p in tmp_path.iterdir()] == [f"{KEY}.json"]

    @pytest.mark.asyncio
    async def test_clear(self, tmp_path) -> None:
        backend = FileSnapshotBackend(tmp_path)
        await backend.write(KEY, "x")
        await backend.clear(KEY)
        await backend.clear(KEY)
        assert not backend.path_for(KEY).exists()

    @pytest.mark.asyncio
    async def test_unwritable_location_raises_snapshot_error(self, tmp_path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way", encoding="utf-8")
        backend = FileSnapshotBackend(blocker)
        with pytest.raises(SnapshotError):
            await backend.write(KEY, "x")

    def test_expands_user(self) -> None:
        backend = FileSnapshotBackend("~/planboard-state")
        assert "~" not in str(backend.directory)


class TestLoadSave:

    @pytest.mark.asyncio
    async def test_absent_is_none(self) -> None:
        assert await load_snapshot(InMemorySnapshotBackend(), KEY) is None

    @pytest.mark.asyncio
    async def test_save_then_load(self, dataset) -> None:
        backend = InMemorySnapshotBackend()
        await save_snapshot(backend, KEY, Snapshot.from_dataset(dataset, 2))
        loaded = await load_snapshot(backend, KEY)
        assert loaded.selected_project == 2
        assert loaded.to_dataset() == dataset

    @pytest.mark.asyncio
    async def test_camel_case_payload_accepted(self) -> None:
        backend = InMemorySnapshotBackend()
        await backend.write(
            KEY,
            '{"projects": [{"id": 1, "name": "P"}], "tasks": [], "phases": [],'
            ' "teamMembers": [{"id": 3, "name": "M"}], "selectedProject": 1}',
        )
        loaded = await load_snapshot(backend, KEY)
        assert loaded.team_members[0].name == "M"
        assert loaded.selected_project == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", ["not json", '{"tasks": [{"id": "x"}]}', "[]"])
    async def test_malformed_payload_raises(self, payload: str) -> None:
        backend = InMemorySnapshotBackend()
        await backend.write(KEY, payload)
        with pytest.raises(DataLoadError) as exc_info:
            await load_snapshot(backend, KEY)
        assert exc_info.value.source == "snapshot"

    @pytest.mark.asyncio
    async def test_unreadable_backend_raises(self, tmp_path) -> None:
        backend = FileSnapshotBackend(tmp_path)
        backend.path_for(KEY).mkdir()
        with pytest.raises(DataLoadError):
            await load_snapshot(backend, KEY)
