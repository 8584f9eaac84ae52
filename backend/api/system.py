from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.models import get_db, MountPoint
from backend.services.vfs_holder import VFSHolder, get_vfs_holder

router = APIRouter()

@router.get("/health")
async def health_check():
    """API health check endpoint"""
    return {"status": "healthy"}

@router.get("/stats")
async def get_stats(db: Session = Depends(get_db), holder: VFSHolder = Depends(get_vfs_holder)):
    """Get mount point statistics"""
    stored_mount_points = db.query(MountPoint).count()
    status = holder.status()

    return {
        "stored_mount_points": stored_mount_points,
        "active_mount_points": status["mount_count"],
        "last_reload": status["last_reload"],
    }
