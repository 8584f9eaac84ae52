import logging
from typing import Iterable, List, Protocol

from sqlalchemy.orm import Session

from backend.models import MountPoint
from backend.services.vfs import VFS, InvalidMountError, MountRecord

logger = logging.getLogger(__name__)


class VFSSource(Protocol):
    """Anything that can produce a freshly built VFS."""

    def get_vfs(self) -> VFS:
        ...


class DatabaseVFSSource:
    """Builds a VFS from the ``mount_points`` table.

    Rows that cannot be mounted are logged and skipped. Store failures
    (``SQLAlchemyError``) are not caught here; they reach the
    caller unchanged and are never reported as a missing mount.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_records(self) -> List[MountRecord]:
        rows = (
            self.db.query(MountPoint.source, MountPoint.name)
            .order_by(MountPoint.id)
            .all()
        )
        return [MountRecord(source, name) for source, name in rows]

    def get_vfs(self) -> VFS:
        vfs = VFS()
        for record in self.get_records():
            try:
                vfs.mount(record.source, record.name)
            except InvalidMountError as e:
                logger.warning(f"Skipping stored mount point: {e}")
        logger.info(f"Loaded {len(vfs)} mount points from database")
        return vfs


class StaticVFSSource:
    """Builds a VFS from records held in memory (configuration, tests)."""

    def __init__(self, records: Iterable[MountRecord]):
        self.records = list(records)

    def get_vfs(self) -> VFS:
        return VFS(self.records)
