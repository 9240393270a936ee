"""
Point d'entrée principal de l'API de gestion des utilisateurs.
Démarrage : uvicorn app.main:app --reload  (depuis le dossier backend/)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import app.models  # noqa: F401 : enregistre tous les modèles dans Base.metadata avant les routers
from app.config import settings
from app.database import create_db_engine, get_db, init_db, make_session_factory
from app.errors import register_exception_handlers
from app.routers import auth
from app.schemas.health import HealthResponse

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    """Niveau de log de la hiérarchie "app" ; le handler reste celui d'uvicorn."""
    logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger("app").setLevel(level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Cycle de vie de l'application : crée le pool de connexions au démarrage,
    le libère à l'arrêt.
    """
    configure_logging()
    engine = create_db_engine()
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    if settings.DB_INIT_ON_STARTUP:
        init_db(engine, app.state.session_factory)

    logger.info("API démarrée (env=%s)", settings.ENV)
    yield

    engine.dispose()
    logger.info("Pool de connexions fermé.")


app = FastAPI(
    title="Gestion Utilisateurs API",
    description="Inscription, connexion par token de session et profil utilisateur",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS : ports localhost autorisés par défaut (à restreindre en production via CORS_ORIGIN_REGEX).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)

register_exception_handlers(app)

app.include_router(auth.router)


@app.get("/api/health", response_model=HealthResponse, tags=["Santé"])
def health_check(db: Session = Depends(get_db)):
    """Vérifie que l'API et la base de données sont opérationnelles."""
    try:
        db_time = db.execute(select(func.now())).scalar()
    except SQLAlchemyError as exc:
        logger.error("Health check : base de données injoignable : %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "database": "disconnected",
                "error": "Base de données injoignable",
            },
        )
    return HealthResponse(status="ok", database="connected", time=db_time)
