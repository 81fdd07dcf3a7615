from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.app.repositories.errors import (
    ConstraintViolation,
    RepositoryError,
    UniqueConstraintViolation,
)

# SQLSTATE unique_violation
PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == PG_UNIQUE_VIOLATION
    # SQLite: "UNIQUE constraint failed: users.email"
    return "unique constraint" in str(orig).lower()


@contextmanager
def translate_db_errors():
    """Re-raise SQLAlchemy failures as application-level repository errors"""
    try:
        yield
    except IntegrityError as exc:
        if is_unique_violation(exc):
            raise UniqueConstraintViolation(str(exc.orig)) from exc
        raise ConstraintViolation(str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        raise RepositoryError(str(exc)) from exc
