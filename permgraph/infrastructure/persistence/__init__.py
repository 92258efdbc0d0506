"""SQLAlchemy persistence: engine/session, ORM models and repositories."""
