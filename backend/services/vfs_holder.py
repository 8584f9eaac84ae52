import logging
import threading
from datetime import datetime
from typing import Optional

from backend.services.vfs import VFS
from backend.services.vfs_source import VFSSource

logger = logging.getLogger(__name__)


class VFSHolder:
    """Holds the VFS snapshot that requests translate against.

    Snapshots are never mutated once published. Reloading builds a new VFS
    and swaps the reference, so a reader that called ``get()`` keeps a
    consistent mapping even while a reload is in progress.
    """

    def __init__(self, vfs: Optional[VFS] = None):
        self._vfs = vfs if vfs is not None else VFS()
        self._lock = threading.Lock()
        self._last_reload: Optional[datetime] = None

    def get(self) -> VFS:
        return self._vfs

    def swap(self, vfs: VFS) -> VFS:
        """Publish ``vfs`` and return the snapshot it replaced."""
        with self._lock:
            previous, self._vfs = self._vfs, vfs
            self._last_reload = datetime.now()
        return previous

    def reload(self, source: VFSSource) -> VFS:
        # Build outside the lock; a failing source leaves the current snapshot in place
        vfs = source.get_vfs()
        self.swap(vfs)
        logger.info(f"VFS reloaded with {len(vfs)} mount points")
        return vfs

    def mount(self, real_path: str, name: str) -> VFS:
        """Publish a copy of the current snapshot with one more mount."""
        with self._lock:
            vfs = self._vfs.copy()
            vfs.mount(real_path, name)
            self._vfs = vfs
            self._last_reload = datetime.now()
        return vfs

    def status(self) -> dict:
        return {
            "mount_count": len(self._vfs),
            "last_reload": self._last_reload.isoformat() if self._last_reload else None,
        }


# Singleton instance used by app
vfs_holder: Optional[VFSHolder] = None

def get_vfs_holder() -> VFSHolder:
    global vfs_holder
    if vfs_holder is None:
        vfs_holder = VFSHolder()
    return vfs_holder
