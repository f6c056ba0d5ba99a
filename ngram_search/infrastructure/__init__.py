"""Infrastructure layer (SQLAlchemy persistence)."""
