# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.

from app.models.user import User, Role, UserRole  # noqa: F401 : doit précéder session et logs
from app.models.session import UserSession  # noqa: F401
from app.models.connection_log import ConnectionLog  # noqa: F401
