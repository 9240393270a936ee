"""
Journal des tentatives de connexion (table logs_connexion, append-only).

Les écritures sont faites dans la transaction de l'appelant : jamais de commit ici,
le log et l'action journalisée sont validés ou annulés ensemble.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.database import utcnow
from app.models.connection_log import ConnectionLog

logger = logging.getLogger(__name__)

MOTIF_EMAIL_INCONNU = "Email inconnu"
MOTIF_UTILISATEUR_INACTIF = "Utilisateur inactif"
MOTIF_MOT_DE_PASSE_INCORRECT = "Mot de passe incorrect"
MOTIF_CONNEXION_REUSSIE = "Connexion réussie"
MOTIF_TOKEN_VALIDE = "Connexion réussie via validation de token"


def log_attempt(
    db: Session,
    email: Optional[str],
    succes: bool,
    message: str,
    utilisateur_id: Optional[int] = None,
    ip: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> ConnectionLog:
    """Ajoute une ligne au journal dans la transaction en cours."""
    entry = ConnectionLog(
        utilisateur_id=utilisateur_id,
        email_tentative=email,
        date_heure=utcnow(),
        adresse_ip=ip,
        user_agent=user_agent,
        succes=succes,
        message=message,
    )
    db.add(entry)

    if succes:
        logger.debug("Tentative réussie (utilisateur %s) : %s", utilisateur_id, message)
    else:
        logger.warning("Tentative refusée pour %s (ip=%s) : %s", email, ip or "inconnue", message)
    return entry
