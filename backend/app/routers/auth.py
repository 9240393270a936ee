"""
Router d'authentification : inscription, connexion, profil.
Les erreurs métier (app.errors) sont traduites en {"error": "..."} par les handlers de main.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import client_ip, get_current_user
from app.errors import UnauthorizedError
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
    UserPublic,
)
from app.services import profile_service, registration_service, session_service

router = APIRouter(prefix="/api/auth", tags=["Authentification"])


@router.post("/register", response_model=RegisterResponse, status_code=201,
             summary="Créer un compte utilisateur")
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Crée un utilisateur avec le rôle "user".

    - 400 si email ou mot de passe manquant
    - 409 si l'email est déjà utilisé
    """
    user = registration_service.register(db, data)
    return RegisterResponse(message="Utilisateur créé avec succès", user=user)


@router.post("/login", response_model=LoginResponse, summary="Se connecter")
def login(data: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """
    Vérifie les identifiants et ouvre une session de 24h.

    Email inconnu et mauvais mot de passe renvoient le même 401 ;
    seul le journal des connexions distingue les deux cas.
    """
    return session_service.login(
        db,
        data,
        ip=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )


@router.get("/profile", response_model=ProfileResponse, summary="Profil de l'utilisateur connecté")
def get_profile(
    current_user: UserPublic = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Retourne l'utilisateur authentifié et la liste de ses rôles."""
    profile = profile_service.get_profile(db, current_user.id)
    if profile is None:
        raise UnauthorizedError()
    return ProfileResponse(user=profile)
