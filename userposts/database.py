import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

logger = logging.getLogger(__name__)

engine = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite só aplica FOREIGN KEY / ON DELETE CASCADE com este pragma
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def init_engine(database_url: str):
    """Cria o engine global (pool de conexões) e associa ao SessionLocal"""
    global engine
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_engine(database_url, pool_pre_ping=True)
    SessionLocal.configure(bind=engine)
    logger.info("Database engine initialized (%s)", engine.url.render_as_string())
    return engine


def dispose_engine():
    global engine
    if engine is not None:
        engine.dispose()
        logger.info("Database connections closed")
    engine = None


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
