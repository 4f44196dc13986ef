"""Test fixtures package."""

from .fake_catalog import FakeIntrospector, FailingIntrospector
from .fake_psycopg import FakeConnection, FakeCursor

__all__ = [
    "FakeIntrospector",
    "FailingIntrospector",
    "FakeConnection",
    "FakeCursor",
]
