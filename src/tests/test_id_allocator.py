"""Unit tests for id_allocator.py."""

import pytest

from src.models import IdSequence
from src.services.database import session_scope
from src.services.id_allocator import ProductIdAllocator, default_allocator


class TestProductIdAllocator:
    """Tests for ProductIdAllocator."""

    def test_starts_at_one(self, test_db):
        with session_scope() as session:
            assert ProductIdAllocator().peek(session) == 1
            assert ProductIdAllocator().allocate(session) == 1

    def test_sequential(self, test_db):
        allocator = ProductIdAllocator()
        with session_scope() as session:
            ids = [allocator.allocate(session) for _ in range(3)]
            assert ids == [1, 2, 3]
            assert allocator.peek(session) == 4

    def test_persists_across_transactions(self, test_db):
        allocator = ProductIdAllocator()
        with session_scope() as session:
            allocator.allocate(session)
        with session_scope() as session:
            assert allocator.allocate(session) == 2

    def test_rollback_returns_id(self, test_db):
        allocator = ProductIdAllocator()
        with pytest.raises(RuntimeError):
            with session_scope() as session:
                allocator.allocate(session)
                raise RuntimeError("abort")

        with session_scope() as session:
            assert allocator.peek(session) == 1

    def test_named_sequences_are_independent(self, test_db):
        products = ProductIdAllocator()
        other = ProductIdAllocator("other")
        with session_scope() as session:
            products.allocate(session)
            products.allocate(session)
            assert other.allocate(session) == 1
            names = {row.name for row in session.query(IdSequence).all()}
            assert names == {"products", "other"}

    def test_default_allocator(self):
        assert default_allocator.sequence_name == "products"
