from .fastapi import EngineDep, attach_mongo, get_engine

__all__ = ["EngineDep", "attach_mongo", "get_engine"]
