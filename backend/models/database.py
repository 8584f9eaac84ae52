from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
import os

DATABASE_URL = os.getenv("DB_URL", "sqlite:///./vfs.db")

if DATABASE_URL.startswith("sqlite"):
    # Ensure SQLite directory exists (e.g., /cache)
    path_part = DATABASE_URL.split(":///")[-1]
    dir_path = os.path.dirname(path_part)
    if dir_path and path_part != ":memory:":
        os.makedirs(dir_path, exist_ok=True)

    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False}
    )
else:
    engine = create_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
