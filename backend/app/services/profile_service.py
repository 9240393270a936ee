"""
Service de lecture du profil utilisateur (rôles agrégés).
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.user import Role, User, UserRole
from app.schemas.auth import ProfileUser


def get_profile(db: Session, user_id: int) -> Optional[ProfileUser]:
    """
    Retourne le profil d'un utilisateur avec la liste de ses rôles (vide si aucun),
    ou None si l'utilisateur n'existe pas. Lecture seule, une seule requête.
    """
    rows = db.execute(
        select(User.id, User.email, User.nom, User.prenom, Role.nom.label("role"))
        .outerjoin(UserRole, UserRole.utilisateur_id == User.id)
        .outerjoin(Role, Role.id == UserRole.role_id)
        .where(User.id == user_id)
        .order_by(Role.nom)
    ).all()

    if not rows:
        return None

    first = rows[0]
    return ProfileUser(
        id=first.id,
        email=first.email,
        nom=first.nom,
        prenom=first.prenom,
        roles=[row.role for row in rows if row.role is not None],
    )
