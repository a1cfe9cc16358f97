"""Infrastructure layer: database gateway, table definitions, lookups.

This layer depends on stdlib and third-party libs (SQLAlchemy, PyMySQL).
It must never import from services, commands, or output.
"""
