"""
Modèle SQLAlchemy pour le journal des tentatives de connexion (append-only).
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from app.database import Base


class ConnectionLog(Base):
    __tablename__ = "logs_connexion"

    id = Column(Integer, primary_key=True, autoincrement=True)
    utilisateur_id = Column(Integer, ForeignKey("utilisateurs.id", ondelete="SET NULL"), nullable=True)  # NULL = email inconnu
    email_tentative = Column(String(255), nullable=True)
    date_heure = Column(DateTime, nullable=False)
    adresse_ip = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    succes = Column(Boolean, nullable=False)
    message = Column(String(255), nullable=True)
