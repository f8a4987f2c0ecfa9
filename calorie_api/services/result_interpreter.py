"""
Turn Gemini's free-form answer into food items.

The model is asked for a bare JSON array but often wraps it in prose or
markdown fences. Extraction never raises: when no usable array is found the
caller gets an empty item list and the raw text to show instead.
"""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from calorie_api.schemas.analyze_schema import FoodItem, InterpretedResult

logger = logging.getLogger(__name__)

DEFAULT_FOOD_NAME = "Food Item"
NAME_KEYS = ("food", "name", "label")


def _reject_constant(_name: str) -> None:
    # NaN / Infinity / -Infinity literals are not JSON; treat them as missing
    return None


_decoder = json.JSONDecoder(parse_constant=_reject_constant)


@dataclass(frozen=True)
class Candidates:
    texts: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Unknown:
    raw: Any = None


ProviderResponse = Union[Candidates, Unknown]


def classify_response(raw: Any) -> ProviderResponse:
    if not isinstance(raw, dict):
        return Unknown(raw)
    candidates = raw.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return Unknown(raw)

    texts: List[str] = []
    found_parts = False
    for cand in candidates:
        content = cand.get("content") if isinstance(cand, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            continue
        found_parts = True
        for part in parts:
            if isinstance(part, dict) and isinstance(part.get("text"), str):
                texts.append(part["text"])

    if not found_parts:
        return Unknown(raw)
    return Candidates(texts)


def response_text(raw: Any) -> str:
    shape = classify_response(raw)
    if isinstance(shape, Candidates):
        return "\n".join(shape.texts)
    return json.dumps(shape.raw, indent=2, ensure_ascii=False)


def _is_object_list(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and all(isinstance(v, dict) for v in value)


def find_json_array(text: str) -> Optional[list]:
    """
    Greedy span from the first '[' to the last ']' wins when it is valid JSON.
    Otherwise the first well-formed array of objects found scanning left to right.
    """
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        return None

    try:
        parsed = _decoder.decode(text[start:end + 1])
    except ValueError:
        parsed = None
    if isinstance(parsed, list):
        return parsed

    idx = start
    while idx != -1:
        try:
            value, _ = _decoder.raw_decode(text, idx)
        except ValueError:
            value = None
        if _is_object_list(value):
            return value
        idx = text.find("[", idx + 1)
    return None


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_confidence(value: Any) -> Optional[float]:
    number = _as_number(value)
    if number is None or not 0.0 <= number <= 1.0:
        return None
    return number


def to_food_item(entry: dict) -> FoodItem:
    name = next(
        (str(entry[k]).strip() for k in NAME_KEYS if entry.get(k) not in (None, "")),
        DEFAULT_FOOD_NAME,
    )
    return FoodItem(
        food=name or DEFAULT_FOOD_NAME,
        estimated_calories=_as_number(entry.get("estimated_calories")),
        confidence=_as_confidence(entry.get("confidence")),
    )


def interpret(raw: Any) -> InterpretedResult:
    text = response_text(raw)
    array = find_json_array(text)
    if array is None:
        logger.info("No JSON array in model response; falling back to raw text (%d chars)", len(text))
        return InterpretedResult(items=[], raw_text=text)

    items = [to_food_item(e) for e in array if isinstance(e, dict)]
    if not items:
        logger.info("JSON array held no food records; falling back to raw text")
    return InterpretedResult(items=items, raw_text=text)
