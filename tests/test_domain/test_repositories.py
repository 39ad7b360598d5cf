"""Tests for the Firestore-backed repositories."""

import pytest

from memoria.domain.entities import Note, Profile
from memoria.domain.entities.note import TITLE_TOO_LONG
from memoria.domain.entities.profile import NAME_REQUIRED
from memoria.domain.repositories import INoteRepository, IProfileRepository
from memoria.domain.repositories.firestore_note_repository import NOTE_NOT_OWNED
from memoria.utils.errors import PermissionDeniedError, StoreError, ValidationError


class TestRepositoryContracts:
    """Test suite for the abstract repository contracts."""

    def test_incomplete_repository_cannot_be_instantiated(self):
        """Test that a missing capability is rejected at instantiation."""

        class PartialNoteRepository(INoteRepository):
            async def save(self, note):
                return "x"

        with pytest.raises(TypeError):
            PartialNoteRepository()

    @pytest.mark.asyncio
    async def test_base_methods_raise_not_implemented(self):
        """Test that delegating to the base raises NotImplementedError."""

        class DelegatingProfileRepository(IProfileRepository):
            async def save(self, profile):
                return await super().save(profile)

            async def find_by_user_id(self, user_id):
                return await super().find_by_user_id(user_id)

            async def exists(self, user_id):
                return await super().exists(user_id)

            async def update(self, profile):
                return await super().update(profile)

        repo = DelegatingProfileRepository()

        with pytest.raises(NotImplementedError):
            await repo.exists("u1")


class TestFirestoreNoteRepository:
    """Test suite for FirestoreNoteRepository."""

    @pytest.mark.asyncio
    async def test_save_new_note_inserts(self, note_repository, fake_store, sample_note):
        """Test that a note without id is inserted with a generated id."""
        note_id = await note_repository.save(Note.from_dict(sample_note))

        assert note_id == "doc_1"
        assert fake_store.calls == ["add_document"]
        stored = fake_store.collections["notes"]["doc_1"]
        assert stored["title"] == "Lista de compras"
        assert "id" not in stored

    @pytest.mark.asyncio
    async def test_save_with_id_updates_and_keeps_created_at(self, note_repository, fake_store):
        """Test the update path refreshes updatedAt but not createdAt."""
        fake_store.collections["notes"]["note_1"] = {
            "userId": "u1",
            "title": "Viejo",
            "content": "",
            "tags": [],
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-01T00:00:00.000Z",
        }

        note = Note.from_dict({"id": "note_1", "user_id": "u1", "title": "Nuevo"})
        note_id = await note_repository.save(note)

        stored = fake_store.collections["notes"]["note_1"]
        assert note_id == "note_1"
        assert fake_store.calls == ["get_document", "update_document"]
        assert stored["userId"] == "u1"
        assert stored["title"] == "Nuevo"
        assert stored["createdAt"] == "2024-01-01T00:00:00.000Z"
        assert stored["updatedAt"] > "2024-01-01T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_save_invalid_note_never_reaches_store(self, note_repository, fake_store):
        """Test that validation errors propagate unwrapped."""
        with pytest.raises(ValidationError):
            await note_repository.save(Note.from_dict({"user_id": "u1", "title": ""}))

        assert fake_store.calls == []

    @pytest.mark.asyncio
    async def test_update_of_another_users_note_is_rejected(self, note_repository, fake_store, sample_note):
        """Test that a note id from another user cannot be overwritten."""
        note_id = await note_repository.save(Note.from_dict(sample_note))
        before = dict(fake_store.collections["notes"][note_id])

        intruder = Note.from_dict({"id": note_id, "user_id": "mallory", "title": "mine now"})
        with pytest.raises(PermissionDeniedError, match=NOTE_NOT_OWNED):
            await note_repository.save(intruder)

        assert fake_store.collections["notes"][note_id] == before
        assert [n.id for n in await note_repository.find_by_user_id("user_123")] == [note_id]
        assert await note_repository.find_by_user_id("mallory") == []

    @pytest.mark.asyncio
    async def test_validation_message_is_not_prefixed(self, note_repository, profile_repository):
        """Test direct callers get the bare validation message, not a store prefix."""
        with pytest.raises(ValidationError) as note_error:
            await note_repository.save(Note.from_dict({"user_id": "u1", "title": "a" * 101}))
        with pytest.raises(ValidationError) as profile_error:
            await profile_repository.save(Profile.from_dict({"user_id": "u1", "name": "", "gender": "male"}))

        assert str(note_error.value) == TITLE_TOO_LONG
        assert str(profile_error.value) == NAME_REQUIRED
        assert not isinstance(note_error.value, StoreError)

    @pytest.mark.asyncio
    async def test_update_missing_document_wraps_error(self, note_repository):
        """Test that updating a missing document becomes a StoreError."""
        note = Note.from_dict({"id": "ghost", "user_id": "u1", "title": "Hola"})

        with pytest.raises(StoreError) as exc_info:
            await note_repository.save(note)

        assert str(exc_info.value).startswith("Error al guardar la nota: ")
        assert "No document to update" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_find_by_id(self, note_repository, fake_store, sample_note):
        """Test lookup by id and absence as None."""
        note_id = await note_repository.save(Note.from_dict(sample_note))

        found = await note_repository.find_by_id(note_id)
        missing = await note_repository.find_by_id("nope")

        assert found.id == note_id
        assert found.tags == ["casa"]
        assert missing is None

    @pytest.mark.asyncio
    async def test_find_by_user_id_sorts_by_updated_at_desc(self, note_repository, fake_store):
        """Test client-side ordering, most recent first."""
        notes = fake_store.collections["notes"]
        notes["a"] = {"userId": "u1", "title": "A", "updatedAt": "2024-01-01T00:00:00.000Z"}
        notes["b"] = {"userId": "u1", "title": "B", "updatedAt": "2024-03-01T00:00:00.000Z"}
        notes["c"] = {"userId": "u1", "title": "C", "updatedAt": "2024-02-01T00:00:00.000Z"}
        notes["d"] = {"userId": "u2", "title": "D", "updatedAt": "2024-04-01T00:00:00.000Z"}

        result = await note_repository.find_by_user_id("u1")

        assert [n.id for n in result] == ["b", "c", "a"]

    @pytest.mark.asyncio
    async def test_find_by_user_id_empty(self, note_repository):
        """Test that a user without notes gets an empty list."""
        assert await note_repository.find_by_user_id("nobody") == []

    @pytest.mark.asyncio
    async def test_store_failures_are_wrapped(self, note_repository, fake_store):
        """Test read failures become StoreError with a prefix."""
        fake_store.fail_with = ConnectionError("sin red")

        with pytest.raises(StoreError, match="Error al obtener las notas: sin red"):
            await note_repository.find_by_user_id("u1")

        with pytest.raises(StoreError, match="Error al obtener la nota: sin red"):
            await note_repository.find_by_id("a")


class TestFirestoreProfileRepository:
    """Test suite for FirestoreProfileRepository."""

    @pytest.mark.asyncio
    async def test_save_upserts_by_user_id(self, profile_repository, fake_store):
        """Test that saving twice replaces the same document."""
        await profile_repository.save(Profile.from_dict({"user_id": "u1", "name": "Ana", "gender": "female"}))
        await profile_repository.save(Profile.from_dict({"user_id": "u1", "name": "Eva", "gender": "other"}))

        profiles = fake_store.collections["profiles"]
        assert list(profiles) == ["u1"]
        assert profiles["u1"]["name"] == "Eva"
        assert "userId" not in profiles["u1"]

    @pytest.mark.asyncio
    async def test_save_validates_first(self, profile_repository, fake_store):
        """Test that invalid profiles are never written."""
        with pytest.raises(ValidationError):
            await profile_repository.save(Profile.from_dict({"user_id": "u1", "name": "Ana", "gender": "x"}))

        assert fake_store.calls == []

    @pytest.mark.asyncio
    async def test_find_by_user_id(self, profile_repository, fake_store, sample_profile_document):
        """Test lookup restores the user id from the key."""
        fake_store.collections["profiles"]["u1"] = sample_profile_document

        profile = await profile_repository.find_by_user_id("u1")

        assert profile.user_id == "u1"
        assert profile.name == "Carlos"
        assert await profile_repository.find_by_user_id("u2") is None

    @pytest.mark.asyncio
    async def test_exists(self, profile_repository, fake_store, sample_profile_document):
        """Test existence check."""
        fake_store.collections["profiles"]["u1"] = sample_profile_document

        assert await profile_repository.exists("u1") is True
        assert await profile_repository.exists("u2") is False

    @pytest.mark.asyncio
    async def test_exists_returns_false_on_failure(self, profile_repository, fake_store):
        """Test that existence checks never raise."""
        fake_store.fail_with = TimeoutError("timeout")

        assert await profile_repository.exists("u1") is False

    @pytest.mark.asyncio
    async def test_save_failure_is_wrapped(self, profile_repository, fake_store):
        """Test write failures become StoreError with a prefix."""
        fake_store.fail_with = ConnectionError("sin red")

        with pytest.raises(StoreError, match="Error al guardar el perfil: sin red"):
            await profile_repository.save(Profile.from_dict({"user_id": "u1", "name": "Ana", "gender": "male"}))

    @pytest.mark.asyncio
    async def test_update_refreshes_updated_at(self, profile_repository, fake_store, sample_profile_document):
        """Test update stamps updated_at and keeps created_at."""
        profile = Profile.from_store("u1", sample_profile_document)

        await profile_repository.update(profile)

        stored = fake_store.collections["profiles"]["u1"]
        assert stored["createdAt"] == "2024-11-28T10:00:00.000Z"
        assert stored["updatedAt"] > "2024-11-28T10:00:00.000Z"
        assert profile.updated_at == stored["updatedAt"]
