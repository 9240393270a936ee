"""
Tests de la couche base de données : moteur, initialisation du schéma, dépendance get_db.
"""

from unittest.mock import MagicMock

from sqlalchemy.pool import StaticPool

from app.database import DEFAULT_ROLES, create_db_engine, get_db, init_db, make_session_factory
from app.models.user import Role


def test_moteur_sqlite_connexion_partagee():
    engine = create_db_engine("sqlite://")
    try:
        assert isinstance(engine.pool, StaticPool)
    finally:
        engine.dispose()


def test_init_db_idempotent(session_factory, count_rows):
    """Un second appel ne duplique pas les rôles de référence."""
    db = session_factory()
    engine = db.get_bind()
    db.close()

    init_db(engine, session_factory)

    assert count_rows(Role) == len(DEFAULT_ROLES)
    assert count_rows(Role, Role.nom == "user") == 1


def test_get_db_ferme_la_session():
    db = MagicMock()
    request = MagicMock()
    request.app.state.session_factory.return_value = db

    gen = get_db(request)
    assert next(gen) is db
    gen.close()

    db.close.assert_called_once()


def test_make_session_factory_sans_autoflush():
    engine = create_db_engine("sqlite://")
    try:
        factory = make_session_factory(engine)
        assert factory.kw["autoflush"] is False
    finally:
        engine.dispose()


def test_moteur_sqlite_fichier_connexion_par_thread(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'app.db'}")
    try:
        assert not isinstance(engine.pool, StaticPool)
    finally:
        engine.dispose()
