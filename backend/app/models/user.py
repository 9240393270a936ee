"""
Modèles SQLAlchemy pour les utilisateurs et leurs rôles.
Les noms de tables et de colonnes suivent le schéma PostgreSQL existant.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, text

from app.database import Base, utcnow


class User(Base):
    __tablename__ = "utilisateurs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)  # contrainte = vraie garantie d'unicité
    password_hash = Column(String(255), nullable=False)
    nom = Column(String(100), nullable=True)
    prenom = Column(String(100), nullable=True)
    actif = Column(Boolean, nullable=False, default=True, server_default=text("true"))
    date_creation = Column(DateTime, nullable=False, default=utcnow)


class Role(Base):
    """Données de référence (user, admin…), non gérées par l'API."""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nom = Column(String(50), unique=True, nullable=False)


class UserRole(Base):
    """Association utilisateur ↔ rôles."""
    __tablename__ = "utilisateur_roles"

    utilisateur_id = Column(Integer, ForeignKey("utilisateurs.id", ondelete="CASCADE"), primary_key=True)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True)
