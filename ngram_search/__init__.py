"""N-gram based fuzzy full-text search for SQLAlchemy-mapped records."""

__version__ = "1.0.0"
