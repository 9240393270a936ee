"""
Modèle SQLAlchemy pour les sessions (tokens opaques émis à la connexion).
Nommé UserSession pour ne pas masquer sqlalchemy.orm.Session.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, text

from app.database import Base, utcnow


class UserSession(Base):
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    utilisateur_id = Column(Integer, ForeignKey("utilisateurs.id", ondelete="CASCADE"), nullable=False)
    token = Column(String(255), unique=True, nullable=False)
    date_creation = Column(DateTime, nullable=False, default=utcnow)
    date_expiration = Column(DateTime, nullable=True)  # NULL = pas d'expiration
    actif = Column(Boolean, nullable=False, default=True, server_default=text("true"))
