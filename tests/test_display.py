"""Tests for calorie_api.utils.display."""
from __future__ import annotations

import pytest

from calorie_api.utils.display import (
    DEFAULT_ICON,
    confidence_tier,
    food_icon,
    format_confidence,
    tier_color,
)


@pytest.mark.parametrize(
    "name, icon",
    [
        ("Green Apple", "🍎"),
        ("Mixed fruit bowl", "🍎"),
        ("Garlic Bread", "🍕"),
        ("Chicken sandwich", "🍔"),
        ("Fried rice", "🍚"),
        ("Grilled salmon", "🐟"),
        ("Iced coffee", "☕"),
        ("Tofu", DEFAULT_ICON),
        (None, DEFAULT_ICON),
    ],
)
def test_food_icon(name, icon) -> None:
    assert food_icon(name) == icon


@pytest.mark.parametrize(
    "confidence, tier, color",
    [
        (0.95, "high", "green"),
        (0.8, "high", "green"),
        (0.79, "medium", "orange"),
        (0.6, "medium", "orange"),
        (0.59, "low", "red"),
        (0.0, "low", "red"),
    ],
)
def test_confidence_tier(confidence: float, tier: str, color: str) -> None:
    assert confidence_tier(confidence) == tier
    assert tier_color(confidence) == color


def test_format_confidence() -> None:
    assert format_confidence(0.874) == "87% confidence"
