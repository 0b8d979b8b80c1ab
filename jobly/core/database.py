import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from jobly.core.config import settings

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# Positional placeholders ($1, $2, ...) as written in repository SQL
_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    Tables are created by Alembic ("alembic upgrade head"); this only makes
    sure the models are imported and registered on Base.metadata.
    """
    from jobly.models import company, job, user  # Import models to register them


def execute(db: Session, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Execute one parameterized statement and return its rows as dicts.

    `$N` placeholders in `sql` bind to `values[N - 1]`. Statements that
    produce no rows (plain UPDATE/DELETE) return an empty list.

    Args:
        db: Database session
        sql: SQL text using $1..$n placeholders
        values: Values to bind, in placeholder order

    Returns:
        List of row mappings keyed by column (or alias) name

    Raises:
        sqlalchemy.exc.SQLAlchemyError: Passed through untouched from the driver
    """
    statement = text(_PLACEHOLDER_RE.sub(r":p\1", sql))
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}

    result = db.execute(statement, params)
    if not result.returns_rows:
        return []

    return [dict(row) for row in result.mappings().all()]
