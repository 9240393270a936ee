"""
Service métier des sessions : émission d'un token à la connexion, validation
du token sur les routes protégées.

Une session est valide si et seulement si :
    sessions.actif = TRUE
    ET (date_expiration IS NULL OU date_expiration > maintenant)
    ET l'utilisateur propriétaire est actif.
"""

import logging
import uuid
from datetime import timedelta, timezone
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import utcnow
from app.errors import (
    MSG_TOKEN_ABSENT,
    AuthError,
    ForbiddenError,
    InternalError,
    ServiceError,
    UnauthorizedError,
    ValidationError,
)
from app.models.session import UserSession
from app.models.user import User
from app.schemas.auth import LoginRequest, LoginResponse, UserPublic
from app.services import password_service
from app.services.connection_log_service import (
    MOTIF_CONNEXION_REUSSIE,
    MOTIF_EMAIL_INCONNU,
    MOTIF_MOT_DE_PASSE_INCORRECT,
    MOTIF_TOKEN_VALIDE,
    MOTIF_UTILISATEUR_INACTIF,
    log_attempt,
)

logger = logging.getLogger(__name__)


def generate_token() -> str:
    """Token opaque : UUID v4 (122 bits aléatoires issus de os.urandom)."""
    return str(uuid.uuid4())


def login(
    db: Session,
    data: LoginRequest,
    ip: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> LoginResponse:
    """
    Authentifie un utilisateur et ouvre une session.

    Toute la tentative (recherche, journalisation, création de session) tient dans une
    transaction. Pour un refus métier, le log est commité puis l'erreur levée ; pour
    une erreur inattendue, tout est annulé, log compris.
    """
    if not data.email or not data.password:
        raise ValidationError()

    refus: Optional[ServiceError] = None
    try:
        with db.begin():
            user = db.execute(
                select(User).where(User.email == data.email)
            ).scalar_one_or_none()

            if user is None:
                password_service.burn_verification(data.password)
                log_attempt(db, data.email, False, MOTIF_EMAIL_INCONNU, ip=ip, user_agent=user_agent)
                refus = AuthError()

            elif not user.actif:
                log_attempt(db, data.email, False, MOTIF_UTILISATEUR_INACTIF,
                            utilisateur_id=user.id, ip=ip, user_agent=user_agent)
                refus = AuthError() if settings.MASK_INACTIVE_ACCOUNTS else ForbiddenError()

            elif not password_service.verify_password(data.password, user.password_hash):
                log_attempt(db, data.email, False, MOTIF_MOT_DE_PASSE_INCORRECT,
                            utilisateur_id=user.id, ip=ip, user_agent=user_agent)
                refus = AuthError()

            else:
                token = generate_token()
                expires_at = utcnow() + timedelta(hours=settings.SESSION_DURATION_HOURS)
                db.add(UserSession(
                    utilisateur_id=user.id,
                    token=token,
                    date_expiration=expires_at,
                    actif=True,
                ))
                log_attempt(db, data.email, True, MOTIF_CONNEXION_REUSSIE,
                            utilisateur_id=user.id, ip=ip, user_agent=user_agent)
                response = LoginResponse(
                    message=MOTIF_CONNEXION_REUSSIE,
                    token=token,
                    user=UserPublic.model_validate(user),
                    expires_at=expires_at.replace(tzinfo=timezone.utc),
                )
    except SQLAlchemyError as exc:
        logger.error("Erreur login : %s", exc, exc_info=True)
        raise InternalError() from exc

    if refus is not None:
        raise refus

    logger.info("Connexion réussie : utilisateur %s", response.user.id)
    return response


def authenticate(
    db: Session,
    token: Optional[str],
    ip: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> UserPublic:
    """
    Résout un token en utilisateur authentifié.

    Le contrôle et la ligne de journal sont dans la même transaction : une session
    vue valide est toujours journalisée, et inversement.
    Un token refusé n'est pas journalisé.
    """
    if not token:
        raise UnauthorizedError(MSG_TOKEN_ABSENT)

    current: Optional[UserPublic] = None
    try:
        with db.begin():
            users = db.execute(
                select(User)
                .join(UserSession, UserSession.utilisateur_id == User.id)
                .where(
                    UserSession.token == token,
                    UserSession.actif.is_(True),
                    User.actif.is_(True),
                    or_(
                        UserSession.date_expiration.is_(None),
                        UserSession.date_expiration > utcnow(),
                    ),
                )
            ).scalars().all()

            if len(users) == 1:
                user = users[0]
                log_attempt(db, user.email, True, MOTIF_TOKEN_VALIDE,
                            utilisateur_id=user.id, ip=ip, user_agent=user_agent)
                current = UserPublic.model_validate(user)
    except SQLAlchemyError as exc:
        logger.error("Erreur validation token : %s", exc, exc_info=True)
        raise InternalError() from exc

    if current is None:
        logger.info("Token refusé (ip=%s)", ip or "inconnue")
        raise UnauthorizedError()
    return current
