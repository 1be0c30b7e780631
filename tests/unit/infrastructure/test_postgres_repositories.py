"""
CRC — tests/unit/infrastructure/test_postgres_repositories.py

Name
- PostgreSQL adapter tests without a database (mocked pool)

Responsibilities
- Validate row -> entity mapping.
- Validate single-statement role mutations (one execute per call).
- Validate driver failures surface as PersistenceError.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from docshare.crosscutting.exceptions import PersistenceError
from docshare.domain.entities import DocumentRole
from docshare.infrastructure.repositories import (
    PostgresDocumentRepository,
    PostgresUserDirectory,
)

pytestmark = pytest.mark.unit


def _pool_returning(*, fetchone=None, fetchall=None):
    conn = MagicMock()
    cursor = conn.execute.return_value
    cursor.fetchone.return_value = fetchone
    cursor.fetchall.return_value = fetchall or []
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return pool, conn


def test_get_document_maps_row():
    doc_id, owner_id, ro = uuid4(), uuid4(), uuid4()
    created = datetime(2025, 1, 1, tzinfo=timezone.utc)
    pool, conn = _pool_returning(
        fetchone=(doc_id, "Spec", None, owner_id, [ro], None, created)
    )

    doc = PostgresDocumentRepository(pool=pool).get_document(doc_id)

    assert doc.id == doc_id
    assert doc.description == ""
    assert doc.read_only_user_ids == [ro]
    assert doc.read_write_user_ids == []
    assert doc.created_at == created
    _, params = conn.execute.call_args.args
    assert params == {"document_id": doc_id}


def test_get_document_missing_returns_none():
    pool, _ = _pool_returning(fetchone=None)
    assert PostgresDocumentRepository(pool=pool).get_document(uuid4()) is None


def test_add_to_role_set_is_one_statement_touching_both_lists():
    pool, conn = _pool_returning(fetchone=(uuid4(),))
    repo = PostgresDocumentRepository(pool=pool)

    assert repo.add_to_role_set(uuid4(), DocumentRole.READ_WRITE, uuid4()) is True

    assert conn.execute.call_count == 1
    sql = conn.execute.call_args.args[0]
    assert "read_write_user_ids = CASE" in sql
    assert "read_only_user_ids = array_remove" in sql


def test_add_to_role_set_unchanged_returns_false():
    pool, _ = _pool_returning(fetchone=None)
    repo = PostgresDocumentRepository(pool=pool)
    assert repo.add_to_role_set(uuid4(), DocumentRole.READ_ONLY, uuid4()) is False


def test_remove_from_role_set_rejects_admin():
    pool, conn = _pool_returning()
    repo = PostgresDocumentRepository(pool=pool)
    with pytest.raises(ValueError):
        repo.remove_from_role_set(uuid4(), DocumentRole.ADMIN, uuid4())
    conn.execute.assert_not_called()


def test_driver_failure_becomes_persistence_error():
    pool = MagicMock()
    pool.connection.side_effect = RuntimeError("connection refused")
    repo = PostgresDocumentRepository(pool=pool)

    with pytest.raises(PersistenceError) as exc_info:
        repo.list_documents_visible_to(uuid4())

    assert isinstance(exc_info.value.original_error, RuntimeError)
    assert exc_info.value.error_code == "PERSISTENCE_ERROR"


def test_ping_reports_false_on_failure():
    pool = MagicMock()
    pool.connection.side_effect = RuntimeError("down")
    assert PostgresDocumentRepository(pool=pool).ping() is False


def test_user_directory_normalizes_email_query():
    user_id = uuid4()
    pool, conn = _pool_returning(fetchone=(user_id, "a@x.com", None))

    user = PostgresUserDirectory(pool=pool).get_user_by_email("  A@X.com ")

    assert user.id == user_id
    assert conn.execute.call_args.args[1] == ("a@x.com",)


def test_user_directory_blank_email_skips_query():
    pool, conn = _pool_returning()
    assert PostgresUserDirectory(pool=pool).get_user_by_email("  ") is None
    conn.execute.assert_not_called()


def test_user_directory_failure_becomes_persistence_error():
    pool = MagicMock()
    pool.connection.side_effect = RuntimeError("timeout")
    with pytest.raises(PersistenceError):
        PostgresUserDirectory(pool=pool).get_user_by_id(uuid4())
