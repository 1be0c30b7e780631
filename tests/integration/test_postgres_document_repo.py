"""
Name: PostgreSQL Repository Integration Tests

Responsibilities:
  - Test PostgresDocumentRepository against a real PostgreSQL database
  - Verify role-set mutations (dedupe, move, remove) in a single UPDATE
  - Verify visibility lookup through the uuid[] membership columns
  - Test PostgresUserDirectory case-insensitive email lookup

Collaborators:
  - docshare.infrastructure.repositories.postgres: repositories under test
  - PostgreSQL: database under test (schema from Alembic)

Notes:
  - Requires running PostgreSQL instance (use Docker Compose)
  - Mark with @pytest.mark.integration

Setup:
  Run before tests: docker compose up -d db
"""

import os

import pytest

# Skip BEFORE importing docshare.* to avoid triggering env validation during collection
if os.getenv("RUN_INTEGRATION") != "1":
    pytest.skip(
        "Set RUN_INTEGRATION=1 to run integration tests", allow_module_level=True
    )

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from docshare.domain.entities import Document, DocumentRole
from docshare.infrastructure.db.pool import get_pool
from docshare.infrastructure.repositories.postgres import (
    PostgresDocumentRepository,
    PostgresUserDirectory,
)

pytestmark = pytest.mark.integration

_T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _insert_user(email: str) -> UUID:
    user_id = uuid4()
    with get_pool().connection() as conn:
        conn.execute(
            "INSERT INTO users (id, email) VALUES (%s, %s)", (user_id, email)
        )
    return user_id


@pytest.fixture
def repo() -> PostgresDocumentRepository:
    return PostgresDocumentRepository()


@pytest.fixture
def owner_id() -> UUID:
    return _insert_user(f"owner-{uuid4().hex[:8]}@x.com")


@pytest.fixture
def member_id() -> UUID:
    return _insert_user(f"member-{uuid4().hex[:8]}@x.com")


def _create(repo, owner_id, name="Spec", offset=0) -> Document:
    return repo.create_document(
        Document(
            id=uuid4(),
            name=name,
            description="v1",
            owner_user_id=owner_id,
            created_at=_T0 + timedelta(seconds=offset),
        )
    )


@pytest.mark.integration
class TestPostgresDocumentRepository:
    def test_create_and_get(self, repo, owner_id):
        doc = _create(repo, owner_id)

        fetched = repo.get_document(doc.id)
        assert fetched.name == "Spec"
        assert fetched.description == "v1"
        assert fetched.owner_user_id == owner_id
        assert fetched.read_only_user_ids == []
        assert fetched.read_write_user_ids == []

    def test_role_set_dedupe_move_and_remove(self, repo, owner_id, member_id):
        doc = _create(repo, owner_id)

        assert repo.add_to_role_set(doc.id, DocumentRole.READ_ONLY, member_id) is True
        assert repo.add_to_role_set(doc.id, DocumentRole.READ_ONLY, member_id) is False

        assert repo.add_to_role_set(doc.id, DocumentRole.READ_WRITE, member_id) is True
        moved = repo.get_document(doc.id)
        assert moved.read_only_user_ids == []
        assert moved.read_write_user_ids == [member_id]

        assert repo.remove_from_role_set(doc.id, DocumentRole.READ_ONLY, member_id) is False
        assert repo.remove_from_role_set(doc.id, DocumentRole.READ_WRITE, member_id) is True
        assert repo.get_document(doc.id).read_write_user_ids == []

    def test_list_visible(self, repo, owner_id, member_id):
        owned = _create(repo, member_id, name="Mine", offset=0)
        shared = _create(repo, owner_id, name="Shared", offset=10)
        _create(repo, owner_id, name="Hidden", offset=20)
        repo.add_to_role_set(shared.id, DocumentRole.READ_ONLY, member_id)

        visible = repo.list_documents_visible_to(member_id)
        assert [d.id for d in visible] == [owned.id, shared.id]

    def test_get_by_name_and_owner(self, repo, owner_id, member_id):
        older = _create(repo, owner_id, name="Spec", offset=0)
        _create(repo, owner_id, name="Spec", offset=5)

        assert repo.get_document_by_name_and_owner("Spec", owner_id).id == older.id
        assert repo.get_document_by_name_and_owner("Spec", member_id) is None

    def test_delete(self, repo, owner_id):
        doc = _create(repo, owner_id)

        assert repo.delete_document(doc.id) is True
        assert repo.delete_document(doc.id) is False
        assert repo.get_document(doc.id) is None

    def test_ping(self, repo):
        assert repo.ping() is True


@pytest.mark.integration
class TestPostgresUserDirectory:
    def test_lookup_is_case_insensitive(self):
        email = f"case-{uuid4().hex[:8]}@x.com"
        user_id = _insert_user(email)
        directory = PostgresUserDirectory()

        user = directory.get_user_by_email(email.upper())
        assert user.id == user_id
        assert directory.get_user_by_id(user_id).email == email
        assert directory.get_user_by_email("nobody@x.com") is None
