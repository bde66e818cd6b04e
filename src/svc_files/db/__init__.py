from .engine import MongoEngine
from .health import db_healthcheck
from .integration import EngineDep, attach_mongo, get_engine
from .settings import MongoSettings, get_mongo_settings

__all__ = [
    "MongoEngine",
    "MongoSettings",
    "get_mongo_settings",
    "db_healthcheck",
    "attach_mongo",
    "get_engine",
    "EngineDep",
]
