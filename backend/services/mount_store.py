import logging
import os
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from backend.models import MountPoint
from backend.services.vfs import InvalidMountError, MountRecord
from backend.utils.path_utils import is_single_component, normalize_path

logger = logging.getLogger(__name__)


def get_configured_mounts(value: Optional[str] = None) -> List[MountRecord]:
    """Parse mount points from ``VFS_MOUNT_DIRS``.

    The format is a comma-separated list of ``name=path`` pairs, e.g.
    ``music=/volume1/Music,photos=/volume1/Photos``.

    Raises:
        InvalidMountError: for an entry without ``=`` or with an empty side.
    """
    if value is None:
        value = os.getenv('VFS_MOUNT_DIRS', '')

    records = []
    for entry in value.split(','):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, source = entry.partition('=')
        name, source = name.strip(), source.strip()
        if not sep or not name or not source:
            raise InvalidMountError(f"Invalid VFS_MOUNT_DIRS entry: {entry!r}")
        records.append(MountRecord(source, name))
    return records


def _validate(record: MountRecord) -> MountRecord:
    if not is_single_component(record.name):
        raise InvalidMountError(f"Invalid mount name: {record.name!r}")
    source = normalize_path(record.source)
    if not source:
        raise InvalidMountError(f"Invalid mount source for {record.name!r}: {record.source!r}")
    return MountRecord(source, record.name)


def list_mount_points(db: Session) -> List[MountPoint]:
    return db.query(MountPoint).order_by(MountPoint.name).all()


def add_mount_point(db: Session, record: MountRecord) -> MountPoint:
    """Insert a mount point, or point an existing name at a new source."""
    record = _validate(record)
    try:
        mount_point = db.query(MountPoint).filter(MountPoint.name == record.name).first()
        if mount_point:
            mount_point.source = record.source
        else:
            mount_point = MountPoint(name=record.name, source=record.source)
            db.add(mount_point)
        db.commit()
        db.refresh(mount_point)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Stored mount point '{record.name}' -> {record.source}")
    return mount_point


def replace_mount_points(db: Session, records: Iterable[MountRecord]) -> List[MountPoint]:
    """Replace every stored mount point with ``records`` in one transaction.

    Later records win over earlier ones with the same name.
    """
    by_name = {}
    for record in records:
        record = _validate(record)
        by_name[record.name] = record

    try:
        db.query(MountPoint).delete()
        for record in by_name.values():
            db.add(MountPoint(name=record.name, source=record.source))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Replaced mount points with {len(by_name)} entries")
    return list_mount_points(db)
