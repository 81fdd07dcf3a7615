class RepositoryError(Exception):
    """The store failed to serve a query or a write."""


class ConstraintViolation(RepositoryError):
    """A write broke an integrity rule (foreign key, NOT NULL, check)."""


class UniqueConstraintViolation(ConstraintViolation):
    """A write collided with a unique constraint (email, subject, token, ...)."""
