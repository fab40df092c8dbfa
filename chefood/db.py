from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from chefood.core.config import settings

# Import registers the StoredValue table on SQLModel.metadata
from chefood.models import db_models  # noqa: F401


def make_engine(url: str | None = None, echo: bool | None = None) -> Engine:
    """
    Build the engine used by the persistent session storage.

    SQLite needs check_same_thread=False because the async client may touch
    the session from a different thread than the one that created it.
    """
    url = url or settings.storage_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        echo=settings.storage_echo if echo is None else echo,
        connect_args=connect_args,
    )


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)
