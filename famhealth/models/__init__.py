# famhealth/models/__init__.py
from famhealth.db.session import Base, engine

# Import model modules so SQLAlchemy registers all mappers.
# Modules (not classes) to avoid circular imports.
from . import user  # noqa: F401
from . import family_member  # noqa: F401
from . import health_history  # noqa: F401
from . import test_result  # noqa: F401
from . import chat_log  # noqa: F401


def init_db() -> None:
    """Create tables if they don't exist."""
    Base.metadata.create_all(bind=engine)
