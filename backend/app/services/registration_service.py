"""
Service métier pour l'inscription des utilisateurs.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.errors import ConflictError, InternalError, ValidationError
from app.models.user import Role, User, UserRole
from app.schemas.auth import RegisteredUser, RegisterRequest
from app.services.password_service import hash_password

logger = logging.getLogger(__name__)


def register(db: Session, data: RegisterRequest) -> RegisteredUser:
    """
    Crée un utilisateur et lui attribue le rôle par défaut, en une seule transaction.

    Étapes :
    1. Vérifier la présence de l'email et du mot de passe
    2. Vérifier que l'email n'est pas déjà pris (chemin rapide)
    3. Insérer l'utilisateur puis son rôle (tout ou rien)

    La contrainte UNIQUE sur utilisateurs.email reste la vraie garantie : deux inscriptions
    simultanées peuvent passer l'étape 2, la seconde échoue alors à l'INSERT (IntegrityError).
    """
    if not data.email or not data.password:
        raise ValidationError()

    try:
        with db.begin():
            existing_id = db.execute(
                select(User.id).where(User.email == data.email)
            ).scalar()
            if existing_id is not None:
                raise ConflictError()

            role_id = db.execute(
                select(Role.id).where(Role.nom == settings.DEFAULT_ROLE)
            ).scalar()
            if role_id is None:
                logger.error("Rôle par défaut '%s' introuvable en base.", settings.DEFAULT_ROLE)
                raise InternalError()

            user = User(
                email=data.email,
                password_hash=hash_password(data.password),
                nom=data.nom or None,
                prenom=data.prenom or None,
            )
            db.add(user)
            db.flush()  # Obtenir l'ID avant l'insertion du rôle

            db.add(UserRole(utilisateur_id=user.id, role_id=role_id))
            db.flush()

            created = RegisteredUser.model_validate(user)
    except ConflictError:
        logger.info("Inscription refusée : email déjà utilisé (%s)", data.email)
        raise
    except IntegrityError:
        logger.info("Inscription refusée par la contrainte d'unicité : %s", data.email)
        raise ConflictError()
    except SQLAlchemyError as exc:
        logger.error("Erreur création utilisateur : %s", exc, exc_info=True)
        raise InternalError() from exc

    logger.info("Utilisateur créé : %s (id=%s)", created.email, created.id)
    return created
