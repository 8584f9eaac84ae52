from .database import Base, engine, SessionLocal, get_db
from .mount_point import MountPoint

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    "MountPoint",
]
