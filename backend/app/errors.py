"""
Erreurs métier de l'API et leur traduction en réponses JSON {"error": "..."}.

Les messages des erreurs d'authentification sont volontairement génériques
(anti-énumération des comptes) : ne pas les rendre plus précis.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MSG_CHAMPS_OBLIGATOIRES = "Email et mot de passe sont obligatoires"
MSG_EMAIL_UTILISE = "Email déjà utilisé"
MSG_IDENTIFIANTS_INCORRECTS = "Email ou mot de passe incorrect"
MSG_UTILISATEUR_INACTIF = "Utilisateur inactif"
MSG_TOKEN_ABSENT = "Token inexistant / introuvable"
MSG_TOKEN_INVALIDE = "Token invalide ou expiré"
MSG_ERREUR_SERVEUR = "Erreur serveur"
MSG_REQUETE_INVALIDE = "Requête invalide"


class ServiceError(Exception):
    """Erreur métier portant son code HTTP et un message destiné au client."""
    status_code = 500
    default_message = MSG_ERREUR_SERVEUR

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = MSG_CHAMPS_OBLIGATOIRES


class ConflictError(ServiceError):
    status_code = 409
    default_message = MSG_EMAIL_UTILISE


class AuthError(ServiceError):
    """Identifiants refusés (email inconnu ou mauvais mot de passe, même message)."""
    status_code = 401
    default_message = MSG_IDENTIFIANTS_INCORRECTS


class UnauthorizedError(ServiceError):
    """Token absent, invalide ou expiré."""
    status_code = 401
    default_message = MSG_TOKEN_INVALIDE


class ForbiddenError(ServiceError):
    status_code = 403
    default_message = MSG_UTILISATEUR_INACTIF


class InternalError(ServiceError):
    status_code = 500
    default_message = MSG_ERREUR_SERVEUR


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps de requête illisible ou mal typé → 400 (pas de détail Pydantic renvoyé)."""
    # Pas de champ "input" dans le log : il peut contenir le mot de passe
    champs = [(e.get("loc"), e.get("type")) for e in exc.errors()]
    logger.info("Requête invalide sur %s %s : %s", request.method, request.url.path, champs)
    return JSONResponse(status_code=400, content={"error": MSG_REQUETE_INVALIDE})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées : trace complète côté serveur,
    message générique côté client (jamais de stack trace ni de requête SQL).
    """
    logger.error("Exception non gérée sur %s %s : %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(status_code=500, content={"error": MSG_ERREUR_SERVEUR})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
