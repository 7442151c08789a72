from app.database.base import Base, TimestampMixin
from app.database.engine import create_schema, engine
from app.database.session import SessionLocal, get_db, session_scope

__all__ = ["Base", "TimestampMixin", "create_schema", "engine", "SessionLocal", "get_db", "session_scope"]
