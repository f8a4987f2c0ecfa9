from typing import Optional

# (keywords, icon); first match wins
FOOD_ICONS = (
    (("apple", "fruit"), "🍎"),
    (("pizza", "bread"), "🍕"),
    (("burger", "sandwich"), "🍔"),
    (("salad", "vegetable"), "🥗"),
    (("rice", "pasta"), "🍚"),
    (("meat", "chicken", "beef"), "🥩"),
    (("fish", "salmon"), "🐟"),
    (("cake", "dessert"), "🍰"),
    (("coffee", "drink"), "☕"),
)
DEFAULT_ICON = "🍽️"

TIER_COLORS = {"high": "green", "medium": "orange", "low": "red"}


def food_icon(name: Optional[str]) -> str:
    lowered = (name or "").lower()
    for keywords, icon in FOOD_ICONS:
        if any(k in lowered for k in keywords):
            return icon
    return DEFAULT_ICON


def confidence_tier(confidence: float) -> str:
    if confidence >= 0.8:
        return "high"
    if confidence >= 0.6:
        return "medium"
    return "low"


def tier_color(confidence: float) -> str:
    return TIER_COLORS[confidence_tier(confidence)]


def format_confidence(confidence: float) -> str:
    return f"{round(confidence * 100)}% confidence"
