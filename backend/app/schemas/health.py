"""
Schéma de réponse du health check.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    database: str
    time: Optional[datetime] = None
