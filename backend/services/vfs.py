import logging
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Tuple

from backend.utils.path_utils import (
    is_single_component,
    join_path,
    split_path,
    strip_prefix,
)

logger = logging.getLogger(__name__)

REAL_TO_VIRTUAL = "real_to_virtual"
VIRTUAL_TO_REAL = "virtual_to_real"


class VFSError(Exception):
    """Base error for mount point translation"""


class NoMatchError(VFSError):
    """Raised when a path is not covered by any mount point"""

    def __init__(self, path: str, direction: str):
        self.path = path
        self.direction = direction
        if direction == REAL_TO_VIRTUAL:
            message = f"Real path has no match in VFS: {path}"
        else:
            message = f"Virtual path has no match in VFS: {path}"
        super().__init__(message)


class InvalidMountError(VFSError, ValueError):
    """Raised when a mount point cannot be registered"""


class MountRecord(NamedTuple):
    """A mount point as persisted: real root (``source``) and virtual name."""
    source: str
    name: str

    @property
    def real_root(self) -> str:
        return self.source

    def to_dict(self):
        return {"name": self.name, "source": self.source}


class VFS:
    """Maps virtual root names to real directories and translates paths.

    A VFS is filled once and then only read. Callers that need to change the
    set of mounts build a new instance (see ``VFSHolder``) instead of mounting
    into one that readers already hold.
    """

    def __init__(self, records: Optional[Iterable[MountRecord]] = None):
        self._mount_points: Dict[str, str] = {}
        self._roots: Dict[str, Tuple[str, ...]] = {}
        for record in records or ():
            self.mount(record.source, record.name)

    def mount(self, real_path: str, name: str) -> None:
        """Register ``real_path`` under ``name``, replacing any previous root.

        Raises:
            InvalidMountError: if ``name`` is not a single path component or
                ``real_path`` is empty.
        """
        if not is_single_component(name):
            raise InvalidMountError(f"Invalid mount name: {name!r}")
        root = split_path(real_path)
        if not root:
            raise InvalidMountError(f"Invalid mount source for {name!r}: {real_path!r}")

        previous = self._mount_points.get(name)
        self._roots[name] = root
        self._mount_points[name] = join_path(root)
        if previous is not None and previous != self._mount_points[name]:
            logger.info(f"Remounted '{name}': {previous} -> {self._mount_points[name]}")

    def mount_points(self) -> Mapping[str, str]:
        """Read-only name -> real root mapping, in name order."""
        return MappingProxyType(dict(sorted(self._mount_points.items())))

    def records(self) -> List[MountRecord]:
        return [MountRecord(source, name) for name, source in sorted(self._mount_points.items())]

    def real_to_virtual(self, real_path: str) -> str:
        """Translate a real path into its virtual path.

        When several roots contain ``real_path`` the deepest root wins, and
        among identical roots the smallest name wins.
        """
        components = split_path(real_path)
        best: Optional[Tuple[int, str, Tuple[str, ...]]] = None

        for name, root in self._roots.items():
            rest = strip_prefix(components, root)
            if rest is None:
                continue
            if best is None or len(root) > best[0] or (len(root) == best[0] and name < best[1]):
                best = (len(root), name, rest)

        if best is None:
            logger.debug(f"No mount point contains real path {real_path}")
            raise NoMatchError(real_path, REAL_TO_VIRTUAL)

        _, name, rest = best
        return join_path((name,) + rest)

    def virtual_to_real(self, virtual_path: str) -> str:
        """Translate a virtual path (``name/...``) into a real path."""
        components = split_path(virtual_path)
        root = self._roots.get(components[0]) if components else None
        if root is None:
            logger.debug(f"No mount point named by virtual path {virtual_path}")
            raise NoMatchError(virtual_path, VIRTUAL_TO_REAL)
        return join_path(root + components[1:])

    def copy(self) -> "VFS":
        return VFS(self.records())

    def __len__(self) -> int:
        return len(self._mount_points)

    def __contains__(self, name) -> bool:
        return name in self._mount_points

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._mount_points))

    def __repr__(self):
        return f"VFS({self.records()!r})"
