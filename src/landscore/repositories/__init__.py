"""Repository layer for LandScore.

Protocols describe what the query engine needs from persistence; the
``postgres`` package implements them on SQLAlchemy's async engine.
"""
