"""Tests for role normalization."""
import pytest

from draft_better.utils.role_normalizer import (
    AssignedPosition,
    Role,
    normalize_role,
    parse_assigned_position,
    position_to_role,
)


@pytest.mark.parametrize(
    "label,expected",
    [
        ("top", Role.TOP),
        ("jungle", Role.JUNGLE),
        ("middle", Role.MID),
        ("bottom", Role.BOT),
        ("utility", Role.SUPPORT),
        ("UTILITY", Role.SUPPORT),
        ("  Middle ", Role.MID),
    ],
)
def test_normalize_role_known_labels(label, expected):
    """Client position labels map to canonical roles, case-insensitive."""
    assert normalize_role(label) == expected


@pytest.mark.parametrize("label", [None, "", "   ", "adc", "mid", "support", "fill"])
def test_normalize_role_unknown_or_absent(label):
    """Anything outside the client vocabulary becomes None."""
    assert normalize_role(label) is None


def test_parse_distinguishes_absent_from_unrecognized():
    """Empty label is absent; unknown text is UNRECOGNIZED."""
    assert parse_assigned_position("") is None
    assert parse_assigned_position(None) is None
    assert parse_assigned_position("adc") == AssignedPosition.UNRECOGNIZED
    assert position_to_role(AssignedPosition.UNRECOGNIZED) is None

