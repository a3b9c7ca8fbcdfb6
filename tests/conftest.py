"""
Pytest configuration and shared fixtures.

Tests run against an in-memory SQLite database; OpenSearch is replaced by
fakes or mocks.
"""
from collections.abc import Callable
from datetime import UTC, datetime
import uuid

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from workbench.changes.models import TranslationChange  # noqa: F401
from workbench.core.config import settings
from workbench.translations.models import ApprovalState, Translation
from workbench.users.models import User


@pytest.fixture
def engine():
    """Fresh in-memory database with all tables"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def project_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def translator(session) -> User:
    user = User(email="translator@example.com", full_name="Tran Slator")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def reviewer(session) -> User:
    user = User(email="reviewer@example.com", full_name="Rev Iewer")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def make_translation(session, project_id) -> Callable[..., Translation]:
    """Factory persisting a Translation; defaults to an untranslated unit"""

    def _make(
        *,
        locale: str = "es",
        source_copy: str = "Hello",
        copy: str | None = None,
        approved: ApprovalState = ApprovalState.PENDING,
        key: str | None = None,
        project: uuid.UUID | None = None,
        created_at: datetime | None = None,
    ) -> Translation:
        translation = Translation(
            project_id=project or project_id,
            key=key or f"key.{uuid.uuid4().hex[:8]}",
            rfc5646_locale=locale,
            source_copy=source_copy,
            copy=copy,
            translated=copy is not None,
            approved=approved,
            created_at=created_at or datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC),
        )
        session.add(translation)
        session.commit()
        session.refresh(translation)
        return translation

    return _make


@pytest.fixture
def spanish_hierarchy(monkeypatch):
    """es-MX -> es-419 -> es -> en"""
    monkeypatch.setattr(settings, "LOCALE_FALLBACKS", {"es-MX": ["es-419"]})
    monkeypatch.setattr(settings, "ROOT_LOCALE", "en")
