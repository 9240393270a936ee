"""
Configuration partagée pour tous les tests.

- client : override de get_db par un MagicMock (aucune connexion réelle)
- session_factory / store_client : base SQLite en mémoire avec le vrai schéma,
  pour vérifier les propriétés transactionnelles (rollback, unicité, journal).

Les variables d'environnement doivent être posées avant l'import de app.config.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from unittest.mock import MagicMock

from app.database import create_db_engine, get_db, init_db, make_session_factory
from app.main import app


@pytest.fixture
def client():
    """Client HTTP de test avec la BDD mockée."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def session_factory():
    """Base SQLite en mémoire, tables créées et rôles de référence insérés."""
    engine = create_db_engine("sqlite://")
    factory = make_session_factory(engine)
    init_db(engine, factory)
    yield factory
    engine.dispose()


@pytest.fixture
def store_client(session_factory):
    """Client HTTP de test branché sur la base SQLite en mémoire."""
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def count_rows(session_factory):
    """Compte les lignes d'un modèle (filtres optionnels) dans une session courte."""
    def _count(model, *criteria) -> int:
        db = session_factory()
        try:
            return db.execute(
                select(func.count()).select_from(model).where(*criteria)
            ).scalar()
        finally:
            db.close()
    return _count
