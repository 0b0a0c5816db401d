"""Unit tests for transition_validator.py and product status names.

Tests cover:
- Every allowed edge of the lifecycle graph
- Every forbidden pair, including self-transitions
- RECALLED reachable from all non-terminal statuses and terminal itself
- Status membership for enum members, integer codes and junk values
- Display names
"""

import itertools

import pytest

from src.models.product_status import ProductStatus, STATUS_NAMES, get_status_name
from src.services.transition_validator import (
    VALID_TRANSITIONS,
    allowed_targets,
    coerce_status,
    is_terminal,
    is_valid_status,
    is_valid_transition,
)

S = ProductStatus

ALLOWED = {
    (S.CREATED, S.IN_PRODUCTION),
    (S.CREATED, S.RECALLED),
    (S.IN_PRODUCTION, S.QUALITY_CHECK),
    (S.IN_PRODUCTION, S.RECALLED),
    (S.QUALITY_CHECK, S.SHIPPED),
    (S.QUALITY_CHECK, S.IN_PRODUCTION),
    (S.QUALITY_CHECK, S.RECALLED),
    (S.SHIPPED, S.DELIVERED),
    (S.SHIPPED, S.RECALLED),
    (S.DELIVERED, S.RECALLED),
}


class TestIsValidTransition:
    """Tests for is_valid_transition()."""

    @pytest.mark.parametrize("current,target", sorted(ALLOWED))
    def test_allowed_edges(self, current, target):
        assert is_valid_transition(current, target) is True

    def test_every_other_pair_rejected(self):
        for current, target in itertools.product(S, S):
            if (current, target) not in ALLOWED:
                assert is_valid_transition(current, target) is False, (current, target)

    @pytest.mark.parametrize("status", list(S))
    def test_self_transition_never_valid(self, status):
        assert is_valid_transition(status, status) is False

    @pytest.mark.parametrize("status", [s for s in S if s != S.RECALLED])
    def test_recall_from_any_stage(self, status):
        assert is_valid_transition(status, S.RECALLED) is True

    def test_recalled_is_absorbing(self):
        assert all(not is_valid_transition(S.RECALLED, target) for target in S)
        assert is_terminal(S.RECALLED)
        assert not any(is_terminal(s) for s in S if s != S.RECALLED)

    def test_quality_check_can_return_to_production(self):
        assert is_valid_transition(S.QUALITY_CHECK, S.IN_PRODUCTION)
        assert not is_valid_transition(S.SHIPPED, S.QUALITY_CHECK)

    def test_accepts_integer_codes(self):
        assert is_valid_transition(1, 2) is True
        assert is_valid_transition(1, 5) is False

    @pytest.mark.parametrize("current,target", [(0, 2), (1, 7), (7, 6), (1, None), ("1", "2")])
    def test_unknown_values_rejected(self, current, target):
        assert is_valid_transition(current, target) is False

    def test_table_covers_every_status(self):
        assert set(VALID_TRANSITIONS) == set(S)

    def test_allowed_targets(self):
        assert allowed_targets(S.QUALITY_CHECK) == {S.SHIPPED, S.IN_PRODUCTION, S.RECALLED}
        assert allowed_targets(S.RECALLED) == frozenset()
        assert allowed_targets(42) == frozenset()


class TestIsValidStatus:
    """Tests for is_valid_status() and coerce_status()."""

    @pytest.mark.parametrize("value", [1, 2, 3, 4, 5, 6])
    def test_known_codes(self, value):
        assert is_valid_status(value) is True
        assert coerce_status(value) == ProductStatus(value)

    @pytest.mark.parametrize("value", [0, 7, -1, 999, None, "SHIPPED", 2.0, True])
    def test_unknown_values(self, value):
        assert is_valid_status(value) is False
        assert coerce_status(value) is None

    def test_enum_members(self):
        assert all(is_valid_status(s) for s in S)
        assert coerce_status(S.SHIPPED) is S.SHIPPED


class TestStatusNames:
    """Tests for get_status_name()."""

    def test_names(self):
        assert get_status_name(S.CREATED) == "Created"
        assert get_status_name(S.IN_PRODUCTION) == "In Production"
        assert get_status_name(S.QUALITY_CHECK) == "Quality Check"
        assert get_status_name(S.SHIPPED) == "Shipped"
        assert get_status_name(S.DELIVERED) == "Delivered"
        assert get_status_name(S.RECALLED) == "Recalled"

    def test_integer_codes(self):
        assert get_status_name(1) == "Created"
        assert get_status_name(5) == "Delivered"

    @pytest.mark.parametrize("value", [0, 7, None, "Created"])
    def test_unknown(self, value):
        assert get_status_name(value) == "Unknown"

    @pytest.mark.parametrize("value", [True, False, 2.0, 1.0])
    def test_names_agree_with_membership(self, value):
        # Anything is_valid_status() rejects has no display name
        assert is_valid_status(value) is False
        assert get_status_name(value) == "Unknown"


    def test_every_status_named(self):
        assert set(STATUS_NAMES) == set(S)
