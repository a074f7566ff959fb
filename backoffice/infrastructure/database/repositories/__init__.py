"""SQLAlchemy-backed repository implementations.

Import the concrete module you need; services load them lazily.
"""
