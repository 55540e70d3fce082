from nutrifit.core.config import settings
from nutrifit.core.base import Base
from nutrifit.core.db import engine, get_db
from nutrifit.core.database import init_database

__all__ = ["settings", "engine", "Base", "get_db", "init_database"]
