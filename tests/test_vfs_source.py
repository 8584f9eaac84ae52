"""Tests for loading mount points from the store and swapping VFS snapshots."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from backend.models import MountPoint
from backend.services.mount_store import (
    add_mount_point,
    get_configured_mounts,
    list_mount_points,
    replace_mount_points,
)
from backend.services.vfs import VFS, InvalidMountError, MountRecord, NoMatchError
from backend.services.vfs_holder import VFSHolder
from backend.services.vfs_source import DatabaseVFSSource, StaticVFSSource


# ===================================================================
# DatabaseVFSSource
# ===================================================================

class TestDatabaseVFSSource:

    def test_empty_table(self, db):
        vfs = DatabaseVFSSource(db).get_vfs()
        assert len(vfs) == 0

    def test_loads_rows(self, db):
        db.add_all([
            MountPoint(source="/volume1/Music", name="music"),
            MountPoint(source="/volume1/Photos", name="photos"),
        ])
        db.commit()

        vfs = DatabaseVFSSource(db).get_vfs()
        assert dict(vfs.mount_points()) == {
            "music": "/volume1/Music",
            "photos": "/volume1/Photos",
        }
        assert vfs.virtual_to_real("music/a.flac") == "/volume1/Music/a.flac"

    def test_records_in_insertion_order(self, db):
        db.add(MountPoint(source="/b", name="b"))
        db.add(MountPoint(source="/a", name="a"))
        db.commit()
        assert DatabaseVFSSource(db).get_records() == [
            MountRecord("/b", "b"),
            MountRecord("/a", "a"),
        ]

    def test_invalid_rows_are_skipped(self, db):
        db.add_all([
            MountPoint(source="/volume1/Music", name="music"),
            MountPoint(source="/volume1/Photos", name="photos/"),
            MountPoint(source="", name="empty"),
        ])
        db.commit()

        vfs = DatabaseVFSSource(db).get_vfs()
        assert dict(vfs.mount_points()) == {"music": "/volume1/Music"}

    def test_store_error_propagates_unchanged(self):
        session = MagicMock()
        session.query.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
        with pytest.raises(OperationalError):
            DatabaseVFSSource(session).get_vfs()


class TestStaticVFSSource:

    def test_builds_from_records(self):
        vfs = StaticVFSSource([MountRecord("test_dir", "root")]).get_vfs()
        assert vfs.virtual_to_real("root") == "test_dir"


# ===================================================================
# Mount store
# ===================================================================

class TestMountStore:

    def test_add_mount_point(self, db):
        mount_point = add_mount_point(db, MountRecord("/volume1/Music/", "music"))
        assert mount_point.id is not None
        assert mount_point.source == "/volume1/Music"
        assert mount_point.to_dict()["name"] == "music"

    def test_add_existing_name_moves_source(self, db):
        add_mount_point(db, MountRecord("/old", "music"))
        add_mount_point(db, MountRecord("/new", "music"))
        rows = list_mount_points(db)
        assert [(r.name, r.source) for r in rows] == [("music", "/new")]

    def test_add_invalid_name(self, db):
        with pytest.raises(InvalidMountError):
            add_mount_point(db, MountRecord("/data", "a/b"))
        assert list_mount_points(db) == []

    def test_replace_mount_points(self, db):
        add_mount_point(db, MountRecord("/old", "old"))
        rows = replace_mount_points(db, [
            MountRecord("/m", "music"),
            MountRecord("/p", "photos"),
            MountRecord("/m2", "music"),
        ])
        assert [(r.name, r.source) for r in rows] == [("music", "/m2"), ("photos", "/p")]

    def test_replace_with_invalid_record_keeps_existing(self, db):
        add_mount_point(db, MountRecord("/old", "old"))
        with pytest.raises(InvalidMountError):
            replace_mount_points(db, [MountRecord("", "music")])
        assert [r.name for r in list_mount_points(db)] == ["old"]

    def test_add_rolls_back_on_store_error(self):
        session = MagicMock()
        session.commit.side_effect = OperationalError("UPDATE", {}, Exception("locked"))
        with pytest.raises(OperationalError):
            add_mount_point(session, MountRecord("/data", "music"))
        session.rollback.assert_called_once()

    def test_replace_rolls_back_on_store_error(self):
        session = MagicMock()
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("locked"))
        with pytest.raises(OperationalError):
            replace_mount_points(session, [MountRecord("/data", "music")])
        session.rollback.assert_called_once()


class TestConfiguredMounts:

    def test_parse(self):
        assert get_configured_mounts("music=/volume1/Music, photos=/volume1/Photos") == [
            MountRecord("/volume1/Music", "music"),
            MountRecord("/volume1/Photos", "photos"),
        ]

    def test_empty(self):
        assert get_configured_mounts("") == []

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("VFS_MOUNT_DIRS", "root=test_dir")
        assert get_configured_mounts() == [MountRecord("test_dir", "root")]

    @pytest.mark.parametrize("value", ["music", "=/data", "music="])
    def test_invalid_entry(self, value):
        with pytest.raises(InvalidMountError):
            get_configured_mounts(value)


# ===================================================================
# VFSHolder
# ===================================================================

class TestVFSHolder:

    def test_starts_empty(self):
        holder = VFSHolder()
        assert len(holder.get()) == 0
        assert holder.status() == {"mount_count": 0, "last_reload": None}

    def test_reload_swaps_snapshot(self):
        holder = VFSHolder()
        before = holder.get()
        holder.reload(StaticVFSSource([MountRecord("test_dir", "root")]))

        assert holder.get() is not before
        assert holder.get().virtual_to_real("root") == "test_dir"
        # Readers holding the old snapshot keep their view
        with pytest.raises(NoMatchError):
            before.virtual_to_real("root")
        assert holder.status()["last_reload"] is not None

    def test_failed_reload_keeps_current_snapshot(self):
        current = VFS([MountRecord("test_dir", "root")])
        holder = VFSHolder(current)
        source = MagicMock()
        source.get_vfs.side_effect = OperationalError("SELECT", {}, Exception("locked"))

        with pytest.raises(OperationalError):
            holder.reload(source)
        assert holder.get() is current

    def test_mount_copies_on_write(self):
        current = VFS([MountRecord("test_dir", "root")])
        holder = VFSHolder(current)
        holder.mount("/volume1/Music", "music")

        assert "music" in holder.get()
        assert "root" in holder.get()
        assert "music" not in current

    def test_swap_returns_previous(self):
        first = VFS()
        holder = VFSHolder(first)
        assert holder.swap(VFS()) is first
