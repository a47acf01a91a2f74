"""Database Layer: SQLAlchemy declarative Base shared by all ORM models."""
