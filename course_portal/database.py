import sqlite3

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from course_portal.config import config

SQLALCHEMY_DATABASE_URL = config.DATABASE_URL

connect_args = {}
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    # Requests are served from a threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    echo=config.DATABASE_ECHO,
    connect_args=connect_args,
)

# Create a session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base model
Base = declarative_base()


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on"""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def reserve_for_write(db: Session) -> None:
    """
    Take the write lock before a check-then-write sequence.

    PostgreSQL callers lock the rows they read with SELECT ... FOR UPDATE.
    SQLite has no row locks and ignores FOR UPDATE, so the transaction is
    opened with BEGIN IMMEDIATE instead; concurrent writers queue on the
    busy timeout rather than failing halfway through.
    """
    if db.get_bind().dialect.name != "sqlite":
        return
    connection = db.connection()
    if not connection.connection.dbapi_connection.in_transaction:
        connection.execute(text("BEGIN IMMEDIATE"))


# Dependency for getting the database session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
