from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from .database import Base


class MountPoint(Base):
    """Persisted binding of a virtual root name to a real directory"""
    __tablename__ = "mount_points"

    id = Column(Integer, primary_key=True, index=True)
    source = Column(String, nullable=False)  # Real root on the storage medium
    name = Column(String, unique=True, index=True, nullable=False)  # Virtual root
    created_at = Column(DateTime, server_default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "source": self.source,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
