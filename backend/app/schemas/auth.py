"""
Schémas Pydantic pour l'inscription, la connexion et le profil.

email et password sont optionnels au niveau du schéma : leur absence est une
erreur métier (400 avec message dédié), pas une erreur de désérialisation.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def _check_utf8(v: Optional[str]) -> Optional[str]:
    """Refuse les chaînes non encodables en UTF-8 (surrogates isolés venus du JSON)."""
    if v is not None:
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("Texte non encodable en UTF-8.")
    return v


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    nom: Optional[str] = None
    prenom: Optional[str] = None

    @field_validator("email", "password", "nom", "prenom")
    @classmethod
    def encodable_utf8(cls, v: Optional[str]) -> Optional[str]:
        return _check_utf8(v)


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email", "password")
    @classmethod
    def encodable_utf8(cls, v: Optional[str]) -> Optional[str]:
        return _check_utf8(v)


class UserPublic(BaseModel):
    """Champs publics d'un utilisateur (jamais le hash du mot de passe)."""
    id: int
    email: str
    nom: Optional[str] = None
    prenom: Optional[str] = None

    model_config = {"from_attributes": True}


class RegisteredUser(UserPublic):
    date_creation: Optional[datetime] = None


class RegisterResponse(BaseModel):
    message: str
    user: RegisteredUser


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserPublic
    expires_at: datetime = Field(alias="expiresAt")

    model_config = {"populate_by_name": True}


class ProfileUser(UserPublic):
    roles: List[str] = []


class ProfileResponse(BaseModel):
    user: ProfileUser
