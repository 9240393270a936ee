"""
Configuration de la connexion à la base de données (PostgreSQL en production).

Le moteur et la fabrique de sessions sont créés au démarrage de l'application
(lifespan) et rangés dans app.state : aucun pool de connexions global au niveau module.
"""

import logging
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

# Rôles de référence insérés par init_db s'ils n'existent pas encore
DEFAULT_ROLES = ("user", "admin")


def utcnow() -> datetime:
    """Horodatage UTC naïf : format de toutes les colonnes DateTime écrites par l'API."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def create_db_engine(url: str = None) -> Engine:
    """
    Crée le moteur SQLAlchemy.
    SQLite en mémoire (dev/tests) : une seule connexion partagée entre threads, sinon
    la base serait vide pour chaque worker du TestClient. Un fichier SQLite garde une
    connexion par thread.
    """
    url = url or settings.DATABASE_URL
    if url.startswith("sqlite"):
        extra = {}
        if url in ("sqlite://", "sqlite:///:memory:"):
            extra["poolclass"] = StaticPool
        return create_engine(
            url,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False},
            **extra,
        )
    return create_engine(
        url,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine, session_factory: sessionmaker) -> None:
    """Crée les tables manquantes et insère les rôles de référence absents."""
    import app.models  # noqa: F401 : enregistre les modèles dans Base.metadata
    from app.models.user import Role

    Base.metadata.create_all(bind=engine)

    db = session_factory()
    try:
        with db.begin():
            existing = set(db.execute(select(Role.nom)).scalars().all())
            for nom in DEFAULT_ROLES:
                if nom not in existing:
                    db.add(Role(nom=nom))
                    logger.info("Rôle de référence créé : %s", nom)
    finally:
        db.close()


def get_db(request: Request):
    """Dépendance FastAPI : fournit une session BDD et la ferme après usage."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
