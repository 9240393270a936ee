"""
Hachage et vérification des mots de passe (bcrypt, sel intégré au hash).
"""

import logging

import bcrypt

from app.config import settings

logger = logging.getLogger(__name__)

_dummy_hash = None


def hash_password(plain: str) -> str:
    """
    Retourne le hash bcrypt du mot de passe.
    bcrypt ignore tout ce qui dépasse 72 octets : la saisie est tronquée explicitement
    (bcrypt >= 4.1 refuse les entrées plus longues).
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(plain.encode("utf-8")[:72], salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Retourne True si le mot de passe correspond au hash. Un hash illisible ne correspond à rien."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8")[:72], hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Hash de mot de passe invalide en base, vérification refusée.")
        return False


def burn_verification(plain: str) -> None:
    """
    Exécute une vérification bcrypt contre un hash factice.
    Appelé quand l'email est inconnu : le temps de réponse reste celui d'un mauvais mot de passe.
    """
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("timing-equalization-dummy")
    verify_password(plain, _dummy_hash)
