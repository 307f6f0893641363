# tests/database/test_harness_provisioning.py
from __future__ import annotations

import uuid

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.exc import DBAPIError, StatementError

from folio.database.models import Content, Document, User
from folio.database.testing.ddl import PROVISIONED_TABLES

pytestmark = pytest.mark.integration

DIMS = 1536


def _zeros(n: int = DIMS) -> list[float]:
    return [0.0] * n


def _count(session, table: str) -> int:
    return session.execute(text(f"SELECT count(*) FROM {table}")).scalar_one()


def _columns(session, schema: str, table: str):
    rows = session.execute(
        text(
            "SELECT column_name, data_type, is_nullable, column_default "
            "FROM information_schema.columns "
            "WHERE table_schema = :s AND table_name = :t ORDER BY ordinal_position"
        ),
        {"s": schema, "t": table},
    ).all()
    return [tuple(r) for r in rows]


# ---------------------------- end to end --------------------------------------

def test_user_content_join_returns_single_row(test_db):
    with test_db.session() as s:
        user = User(id=uuid.uuid4(), email="test@example.com")
        s.add(user)
        s.flush()
        s.add(Content(user_id=user.id, title="Hello", body="World"))
        s.commit()

        rows = s.execute(
            select(Content, User).join(User, Content.user_id == User.id)
        ).all()

        assert len(rows) == 1
        content, joined_user = rows[0]
        assert content.user_id == user.id
        assert joined_user.email == "test@example.com"
        assert content.status == "draft"


def test_nearest_neighbour_ranks_query_document_first(test_db):
    first = _zeros()
    second = _zeros()
    second[0] = 1.0

    with test_db.session() as s:
        d1 = Document(content="first", embedding=first)
        d2 = Document(content="second", embedding=second)
        s.add_all([d1, d2])
        s.commit()

        distance = Document.embedding.l2_distance(first)
        rows = s.execute(
            select(Document.id, distance.label("distance")).order_by(distance)
        ).all()

    assert [r.id for r in rows] == [d1.id, d2.id]
    assert rows[0].distance <= rows[1].distance


def test_second_provision_without_cleanup_starts_empty(harness, test_db):
    with test_db.session() as s:
        s.add(User(id=uuid.uuid4(), email="leak@example.com"))
        s.commit()

    again = harness.provision("second-provision")
    with again.session() as s:
        assert _count(s, "auth.users") == 0


# ---------------------------- provisioning ------------------------------------

def test_provision_is_idempotent_and_shape_is_stable(harness, test_db):
    with test_db.session() as s:
        before = {t: _columns(s, *t.split(".")) for t in PROVISIONED_TABLES}
        counts_before = {t: _count(s, t) for t in PROVISIONED_TABLES}

    again = harness.provision()
    with again.session() as s:
        after = {t: _columns(s, *t.split(".")) for t in PROVISIONED_TABLES}
        counts_after = {t: _count(s, t) for t in PROVISIONED_TABLES}

    assert before == after
    assert all(v == 0 for v in counts_before.values())
    assert all(v == 0 for v in counts_after.values())


def test_users_table_shape(test_db):
    with test_db.session() as s:
        cols = {name: (dtype, nullable) for name, dtype, nullable, _ in _columns(s, "auth", "users")}

    assert cols == {
        "id": ("uuid", "NO"),
        "email": ("text", "NO"),
        "username": ("text", "YES"),
        "created_at": ("timestamp with time zone", "NO"),
        "updated_at": ("timestamp with time zone", "NO"),
        "profile_image_url": ("text", "YES"),
    }


def test_documents_embedding_is_1536_dim_vector(test_db):
    with test_db.session() as s:
        typmod = s.execute(
            text(
                "SELECT format_type(a.atttypid, a.atttypmod) FROM pg_attribute a "
                "WHERE a.attrelid = 'test.documents'::regclass AND a.attname = 'embedding'"
            )
        ).scalar_one()
    assert typmod == "vector(1536)"


def test_schema_objects_resolve_through_search_path(test_db):
    with test_db.session() as s:
        path = s.execute(text("SHOW search_path")).scalar_one()
        s.add(Document(content="x", embedding=_zeros()))
        s.commit()
        assert _count(s, "test.documents") == 1
    assert path.replace(" ", "") == "auth,test,public"


# ---------------------------- cleanup -----------------------------------------

def test_cleanup_empties_every_provisioned_table(test_db):
    with test_db.session() as s:
        user = User(id=uuid.uuid4(), email="a@example.com")
        s.add(user)
        s.flush()
        s.add(Content(user_id=user.id, title="t", body="b"))
        s.add(Document(content="d", embedding=_zeros()))
        s.commit()

    test_db.cleanup()

    with test_db.session() as s:
        for table in PROVISIONED_TABLES:
            assert _count(s, table) == 0
        # enforcement restored
        role = s.execute(text("SHOW session_replication_role")).scalar_one()
    assert role == "origin"


def test_cleanup_failure_is_swallowed(test_db, harness):
    with test_db.session() as s:
        s.execute(text("DROP TABLE test.documents"))
        s.commit()

    # TRUNCATE on a missing table fails; cleanup must only log it
    test_db.cleanup()

    fresh = harness.provision()
    with fresh.session() as s:
        assert _count(s, "test.documents") == 0


# ---------------------------- relational contract -----------------------------

def test_deleting_user_cascades_to_content_not_documents(test_db):
    with test_db.session() as s:
        user = User(id=uuid.uuid4(), email="cascade@example.com")
        s.add(user)
        s.flush()
        s.add_all([
            Content(user_id=user.id, title="one", body="1"),
            Content(user_id=user.id, title="two", body="2"),
        ])
        s.add(Document(content="unrelated", embedding=_zeros()))
        s.commit()

        s.execute(text("DELETE FROM auth.users WHERE id = :id"), {"id": user.id})
        s.commit()

        assert _count(s, "auth.content") == 0
        assert _count(s, "test.documents") == 1


def test_content_requires_existing_user(test_db):
    with test_db.session() as s:
        s.add(Content(user_id=uuid.uuid4(), title="orphan", body="x"))
        with pytest.raises(DBAPIError):
            s.commit()
        s.rollback()


def test_embedding_must_have_1536_dimensions(test_db):
    with test_db.session() as s:
        s.add(Document(content="ok", embedding=_zeros()))
        s.commit()
        stored = s.execute(select(Document.embedding)).scalar_one()
        assert len(stored) == DIMS

        s.add(Document(content="short", embedding=_zeros(3)))
        with pytest.raises(StatementError):
            s.commit()
        s.rollback()

        assert s.execute(select(func.count()).select_from(Document)).scalar_one() == 1


def test_database_rejects_wrong_width_vector_literal(test_db):
    with test_db.session() as s:
        with pytest.raises(DBAPIError):
            s.execute(text("INSERT INTO test.documents (content, embedding) VALUES ('x', '[0,0,0]')"))
        s.rollback()
