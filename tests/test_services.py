"""Store-level tests for notes, users, the password gate and short links."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from errors import Conflict, Internal, NotFound, Unauthorized
from models.notesmodel import NotesModel
from services.identity import IdentityStore
from services.notes_store import NoteStore
from services.password_gate import PasswordGate
from services.short_links import ShortLinkResolver
from utils import hash_password

pytestmark = pytest.mark.anyio

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_note(note_id: str, owner: str | None = "owner0000001", minutes: int = 0, **kwargs) -> NotesModel:
    created_at = BASE_TIME + timedelta(minutes=minutes)
    return NotesModel(
        id=note_id,
        title=f"title {note_id}",
        content="content",
        created_at=created_at,
        updated_at=created_at,
        short_url=kwargs.pop("short_url", f"s{note_id[:7]}"),
        user_id=owner,
        **kwargs,
    )


@pytest.fixture
def store(redis):
    return NoteStore(redis)


class TestNoteStore:
    async def test_save_writes_record_and_indices(self, store, redis) -> None:
        note = make_note("note00000001")

        await store.save(note)

        stored = json.loads(await redis.get("note:note00000001"))
        assert stored["title"] == "title note00000001"
        assert stored["userId"] == "owner0000001"
        assert await redis.get(f"short:{note.short_url}") == note.id
        assert await redis.sismember("notes:index", note.id)
        assert await redis.sismember("user:owner0000001:notes", note.id)

    async def test_get_and_get_by_short_url(self, store) -> None:
        note = make_note("note00000001")
        await store.save(note)

        assert await store.get(note.id) == note
        assert await store.get_by_short_url(note.short_url) == note
        assert await store.get("missing") is None
        assert await store.get_by_short_url("missing") is None

    async def test_get_many_skips_missing_and_unreadable(self, store, redis) -> None:
        await store.save(make_note("note00000001"))
        await redis.set("note:broken", "{not json")

        notes = await store.get_many(["note00000001", "missing", "broken"])

        assert [note.id for note in notes] == ["note00000001"]

    async def test_list_by_owner_newest_first(self, store) -> None:
        await store.save(make_note("note00000001", minutes=0))
        await store.save(make_note("note00000002", minutes=2))
        await store.save(make_note("note00000003", minutes=1))
        await store.save(make_note("note00000004", owner="someoneelse1", minutes=3))

        notes = await store.list_by_owner("owner0000001")

        assert [note.id for note in notes] == ["note00000002", "note00000003", "note00000001"]

    async def test_list_by_owner_ignores_foreign_index_entries(self, store, redis) -> None:
        await store.save(make_note("note00000001", owner="someoneelse1"))
        await redis.sadd("user:owner0000001:notes", "note00000001")

        assert await store.list_by_owner("owner0000001") == []

    async def test_delete_removes_record_link_and_indices(self, store, redis) -> None:
        note = make_note("note00000001")
        await store.save(note)

        await store.delete(note.id)

        assert await store.get(note.id) is None
        assert await store.get_by_short_url(note.short_url) is None
        assert not await redis.sismember("notes:index", note.id)
        assert await store.list_by_owner("owner0000001") == []

    async def test_reads_legacy_records(self, store, redis) -> None:
        await redis.set(
            "note:legacy000001",
            json.dumps(
                {
                    "id": "legacy000001",
                    "title": "old",
                    "content": "text",
                    "createdAt": "2024-05-01T10:00:00.000Z",
                    "updatedAt": "2024-05-01T10:00:00.000Z",
                }
            ),
        )

        note = await store.get("legacy000001")

        assert note.user_id is None
        assert note.is_password_protected is False
        assert note.short_url is None


class TestIdentityStore:
    async def test_create_and_find(self, redis) -> None:
        users = IdentityStore(redis)

        user = await users.create("alice", "hash")

        assert len(user.id) == 12
        assert await users.find_by_id(user.id) == user
        assert await users.find_by_username("alice") == user
        assert await users.find_by_username("bob") is None
        assert await users.find_by_id("missing") is None

    async def test_duplicate_username_conflicts(self, redis) -> None:
        users = IdentityStore(redis)
        first = await users.create("alice", "hash")

        with pytest.raises(Conflict):
            await users.create("alice", "other")

        assert await users.find_by_username("alice") == first


class TestPasswordGate:
    async def test_unprotected_note_always_grants(self, store) -> None:
        await store.save(make_note("note00000001"))

        result = await PasswordGate(store).verify("note00000001", "whatever")

        assert result.has_access is True
        assert result.is_password_protected is False

    async def test_protected_note_flow(self, store) -> None:
        note = make_note("note00000001")
        note.set_password(hash_password("1234"))
        await store.save(note)
        gate = PasswordGate(store)

        prompt = await gate.verify(note.id)
        assert (prompt.has_access, prompt.is_password_protected) == (False, True)

        first = await gate.verify(note.id, "1234")
        second = await gate.verify(note.id, "1234")
        assert first == second
        assert first.has_access is True

        with pytest.raises(Unauthorized):
            await gate.verify(note.id, "wrong")

    async def test_protected_note_without_hash_is_internal(self, store) -> None:
        await store.save(make_note("note00000001", is_password_protected=True))

        with pytest.raises(Internal):
            await PasswordGate(store).verify("note00000001", "1234")

    async def test_protected_note_without_hash_still_prompts(self, store) -> None:
        await store.save(make_note("note00000001", is_password_protected=True))

        prompt = await PasswordGate(store).verify("note00000001")

        assert (prompt.has_access, prompt.is_password_protected) == (False, True)

    async def test_missing_note(self, store) -> None:
        with pytest.raises(NotFound):
            await PasswordGate(store).verify("missing")


class TestShortLinkResolver:
    async def test_resolves_redacted_view(self, store) -> None:
        note = make_note("note00000001")
        note.set_password(hash_password("1234"))
        await store.save(note)

        shared = await ShortLinkResolver(store).resolve(note.short_url)

        assert shared.id == note.id
        assert shared.content == ""
        assert shared.is_password_protected is True
        assert "passwordHash" not in shared.to_json()
        assert "userId" not in shared.to_json()

    async def test_unknown_link(self, store) -> None:
        with pytest.raises(NotFound):
            await ShortLinkResolver(store).resolve("missing")
