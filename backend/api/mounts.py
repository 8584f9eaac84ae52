from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List
from pydantic import BaseModel
import logging

from backend.models import get_db
from backend.services.mount_store import add_mount_point, replace_mount_points
from backend.services.vfs import InvalidMountError, MountRecord, NoMatchError
from backend.services.vfs_holder import VFSHolder, get_vfs_holder
from backend.services.vfs_source import DatabaseVFSSource

logger = logging.getLogger(__name__)

router = APIRouter()

class MountPointResponse(BaseModel):
    name: str
    source: str

class MountPointCreate(BaseModel):
    name: str
    source: str

class TranslationResponse(BaseModel):
    path: str
    result: str

class ReloadResponse(BaseModel):
    mount_count: int

def _reload(db: Session, holder: VFSHolder):
    try:
        return holder.reload(DatabaseVFSSource(db))
    except SQLAlchemyError as e:
        logger.error(f"Failed to load mount points: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to load mount points: {str(e)}")
    except InvalidMountError as e:
        logger.error(f"Invalid mount point while loading: {e}")
        raise HTTPException(status_code=500, detail=f"Invalid mount point while loading: {str(e)}")

@router.get("/", response_model=List[MountPointResponse])
async def get_mount_points(holder: VFSHolder = Depends(get_vfs_holder)):
    """List the mount points currently used for translation"""
    vfs = holder.get()
    return [MountPointResponse(**record.to_dict()) for record in vfs.records()]

@router.post("/", response_model=MountPointResponse)
async def create_mount_point(
    mount_data: MountPointCreate,
    db: Session = Depends(get_db),
    holder: VFSHolder = Depends(get_vfs_holder)
):
    """Add a mount point, or move an existing one to a new source"""
    try:
        mount_point = add_mount_point(db, MountRecord(mount_data.source, mount_data.name))
    except InvalidMountError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=f"Failed to store mount point: {str(e)}")

    _reload(db, holder)
    return MountPointResponse(**mount_point.to_dict())

@router.put("/", response_model=List[MountPointResponse])
async def set_mount_points(
    mounts: List[MountPointCreate],
    db: Session = Depends(get_db),
    holder: VFSHolder = Depends(get_vfs_holder)
):
    """Replace all mount points"""
    try:
        mount_points = replace_mount_points(db, [MountRecord(m.source, m.name) for m in mounts])
    except InvalidMountError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=f"Failed to store mount points: {str(e)}")

    _reload(db, holder)
    return [MountPointResponse(**mount_point.to_dict()) for mount_point in mount_points]

@router.post("/reload", response_model=ReloadResponse)
async def reload_mount_points(
    db: Session = Depends(get_db),
    holder: VFSHolder = Depends(get_vfs_holder)
):
    """Rebuild the VFS from the stored mount points"""
    vfs = _reload(db, holder)
    return ReloadResponse(mount_count=len(vfs))

@router.get("/real-to-virtual", response_model=TranslationResponse)
async def real_to_virtual(
    path: str = Query(..., description="Real filesystem path"),
    holder: VFSHolder = Depends(get_vfs_holder)
):
    """Translate a real path into a virtual path"""
    try:
        result = holder.get().real_to_virtual(path)
    except NoMatchError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TranslationResponse(path=path, result=result)

@router.get("/virtual-to-real", response_model=TranslationResponse)
async def virtual_to_real(
    path: str = Query(..., description="Virtual path starting with a mount name"),
    holder: VFSHolder = Depends(get_vfs_holder)
):
    """Translate a virtual path into a real path"""
    try:
        result = holder.get().virtual_to_real(path)
    except NoMatchError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TranslationResponse(path=path, result=result)
