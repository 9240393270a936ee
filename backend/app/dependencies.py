"""
Dépendances FastAPI pour l'authentification par token de session.

Le token est la valeur brute de l'en-tête Authorization. Un préfixe "Bearer "
est toléré (retiré) mais jamais exigé.
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.auth import UserPublic
from app.services import session_service


def extract_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    token = authorization.strip()
    if token[:7].lower() == "bearer ":
        token = token[7:].strip()
    return token or None


def client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


def get_current_user(request: Request, db: Session = Depends(get_db)) -> UserPublic:
    """
    Exige un token de session valide. Lève UnauthorizedError (401) sinon.

    Utilisation :
        @router.get("/protegee")
        def route(current_user: UserPublic = Depends(get_current_user)): ...
    """
    return session_service.authenticate(
        db,
        extract_token(request.headers.get("Authorization")),
        ip=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
