"""Pytest configuration and fixtures for Memoria tests."""

import copy
import itertools
import os
from collections import defaultdict
from typing import Any

import pytest
from google.api_core.exceptions import NotFound

# Set test environment
os.environ["APP_ENV"] = "test"
os.environ["FIRESTORE_PROJECT_ID"] = "memoria-test"

from memoria.config import Settings  # noqa: E402
from memoria.context import create_app_context  # noqa: E402
from memoria.domain.repositories import (  # noqa: E402
    FirestoreNoteRepository,
    FirestoreProfileRepository,
)
from memoria.services.identity import LocalIdentityProvider  # noqa: E402


class FakeFirestoreService:
    """In-memory double with the FirestoreService method set."""

    def __init__(self):
        self.collections: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        self.fail_with: Exception | None = None
        self.calls: list[str] = []
        self._ids = itertools.count(1)

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    async def get_document(self, collection, document_id):
        self._record("get_document")
        doc = self.collections[collection].get(document_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def set_document(self, collection, document_id, data):
        self._record("set_document")
        self.collections[collection][document_id] = copy.deepcopy(data)

    async def update_document(self, collection, document_id, data):
        self._record("update_document")
        if document_id not in self.collections[collection]:
            raise NotFound(f"No document to update: {collection}/{document_id}")
        self.collections[collection][document_id].update(copy.deepcopy(data))

    async def add_document(self, collection, data):
        self._record("add_document")
        document_id = f"doc_{next(self._ids)}"
        self.collections[collection][document_id] = copy.deepcopy(data)
        return document_id

    async def query_by_field(self, collection, field, value):
        self._record("query_by_field")
        return [
            (doc_id, copy.deepcopy(data))
            for doc_id, data in self.collections[collection].items()
            if data.get(field) == value
        ]


@pytest.fixture
def settings():
    """Settings without the loading delay."""
    return Settings(loading_clear_delay_ms=0, firestore_project_id="memoria-test")


@pytest.fixture
def fake_store():
    return FakeFirestoreService()


@pytest.fixture
def note_repository(fake_store):
    return FirestoreNoteRepository(fake_store, "notes")


@pytest.fixture
def profile_repository(fake_store):
    return FirestoreProfileRepository(fake_store, "profiles")


@pytest.fixture
def identity():
    """Identity provider already resolved with no session."""
    provider = LocalIdentityProvider()
    provider.start()
    return provider


@pytest.fixture
def app_context(settings, identity, note_repository, profile_repository):
    return create_app_context(
        settings=settings,
        identity=identity,
        note_repository=note_repository,
        profile_repository=profile_repository,
    )


@pytest.fixture
def sample_note():
    """Sample note data for testing."""
    return {
        "user_id": "user_123",
        "title": "Lista de compras",
        "content": "Leche, pan",
        "tags": ["casa"],
    }


@pytest.fixture
def sample_profile_document():
    """Stored profile document for testing."""
    return {
        "name": "Carlos",
        "gender": "male",
        "createdAt": "2024-11-28T10:00:00.000Z",
        "updatedAt": "2024-11-28T10:00:00.000Z",
    }
