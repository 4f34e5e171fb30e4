"""
Would You Rather – SQLAlchemy ORM models package.

Imports all model classes so the app can discover them through a single
``import wyr.models``.
"""

from wyr.models.question import Question  # noqa: F401
