from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.models import Base, engine, SessionLocal
from backend.api import mounts, system
from backend.services.mount_store import add_mount_point, get_configured_mounts
from backend.services.vfs_holder import get_vfs_holder
from backend.services.vfs_source import DatabaseVFSSource

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


def init_vfs():
    """Create tables, store configured mount points and load the VFS"""
    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    try:
        for record in get_configured_mounts():
            add_mount_point(session, record)
        get_vfs_holder().reload(DatabaseVFSSource(session))
    finally:
        session.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_vfs()
    yield


app = FastAPI(
    title="Media VFS API",
    description="API for mapping virtual media roots to real directories",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers - with /api prefix and without for direct access
app.include_router(mounts.router, prefix="/api/mounts", tags=["mounts"])
app.include_router(system.router, prefix="/api", tags=["system"])
app.include_router(mounts.router, prefix="/mounts", tags=["mounts-direct"])

@app.get("/")
async def root():
    return {"message": "Media VFS API", "version": "1.0.0"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host='0.0.0.0', port=int(os.getenv("PORT", "8000")), log_level='info')
