"""
Field-by-field validation of candidate menu item payloads.

Each field has an ordered list of steps. A step either accepts the value
(possibly normalized) and hands it to the next step, or rejects it with a
message, which ends the evaluation of that field. Every field is evaluated,
so a rejected payload reports all of its failing fields at once.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from app.menu.models import ALLOWED_CATEGORIES, FieldError, MenuItemDraft

MISSING: Any = object()

# Plain decimal or exponent notation; no padding, digit separators or words
FLOAT_RE = re.compile(r"[+-]?[0-9]*(\.[0-9]*)?([eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class Accepted:
    value: Any


@dataclass(frozen=True)
class Rejected:
    message: str


StepResult = Accepted | Rejected
Step = Callable[[Any], StepResult]


@dataclass(frozen=True)
class FieldRule:
    field: str
    steps: tuple[Step, ...]
    optional: bool = False


@dataclass
class ValidationOutcome:
    draft: MenuItemDraft | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.draft is not None


def required(message: str) -> Step:
    def step(value: Any) -> StepResult:
        # null counts as present; the field's type step rejects it
        if value is MISSING:
            return Rejected(message)
        return Accepted(value)

    return step


def is_string(message: str) -> Step:
    def step(value: Any) -> StepResult:
        if not isinstance(value, str):
            return Rejected(message)
        return Accepted(value)

    return step


def trimmed(value: str) -> StepResult:
    return Accepted(value.strip())


def min_length(length: int, message: str) -> Step:
    def step(value: Any) -> StepResult:
        if len(value) < length:
            return Rejected(message)
        return Accepted(value)

    return step


def positive_number(message: str) -> Step:
    def step(value: Any) -> StepResult:
        # bool is an int subclass but never a price
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            return Rejected(message)
        if isinstance(value, str) and (
            value in ("", ".", "+", "-") or FLOAT_RE.fullmatch(value) is None
        ):
            return Rejected(message)
        try:
            number = float(value)
        except (ValueError, OverflowError):
            return Rejected(message)
        if not math.isfinite(number) or number <= 0:
            return Rejected(message)
        return Accepted(number)

    return step


def one_of(choices: tuple[str, ...], message: str) -> Step:
    def step(value: Any) -> StepResult:
        if not isinstance(value, str) or value not in choices:
            return Rejected(message)
        return Accepted(value)

    return step


def non_empty_text_list(message: str) -> Step:
    def step(value: Any) -> StepResult:
        if not isinstance(value, list) or not value:
            return Rejected(message)
        if not all(isinstance(entry, str) for entry in value):
            return Rejected(message)
        return Accepted(list(value))

    return step


_BOOLEAN_STRINGS = {"true": True, "false": False, "1": True, "0": False}


def boolean(message: str) -> Step:
    def step(value: Any) -> StepResult:
        if isinstance(value, bool):
            return Accepted(value)
        if isinstance(value, int) and value in (0, 1):
            return Accepted(bool(value))
        if isinstance(value, str) and value in _BOOLEAN_STRINGS:
            return Accepted(_BOOLEAN_STRINGS[value])
        return Rejected(message)

    return step


MENU_ITEM_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "name",
        (
            required("Name is required"),
            is_string("Name must be a string"),
            trimmed,
            min_length(3, "Name must be at least 3 characters long"),
        ),
    ),
    FieldRule(
        "description",
        (
            required("Description is required"),
            is_string("Description must be a string"),
            trimmed,
            min_length(10, "Description must be at least 10 characters long"),
        ),
    ),
    FieldRule(
        "price",
        (
            required("Price is required"),
            positive_number("Price must be a number greater than 0"),
        ),
    ),
    FieldRule(
        "category",
        (
            required("Category is required"),
            one_of(
                ALLOWED_CATEGORIES,
                f"Category must be one of: {', '.join(ALLOWED_CATEGORIES)}",
            ),
        ),
    ),
    FieldRule(
        "ingredients",
        (
            required("Ingredients are required"),
            non_empty_text_list("Ingredients must be an array with at least 1 ingredient"),
        ),
    ),
    FieldRule(
        "available",
        (boolean("Available must be a boolean"),),
        optional=True,
    ),
)


def run_steps(steps: tuple[Step, ...], value: Any) -> StepResult:
    result: StepResult = Accepted(value)
    for step in steps:
        result = step(result.value)
        if isinstance(result, Rejected):
            break
    return result


def validate_menu_item(
    payload: Any,
    rules: tuple[FieldRule, ...] = MENU_ITEM_RULES,
) -> ValidationOutcome:
    data: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}
    values: dict[str, Any] = {}
    errors: list[FieldError] = []

    for rule in rules:
        raw = data.get(rule.field, MISSING)
        if raw is MISSING and rule.optional:
            continue
        result = run_steps(rule.steps, raw)
        if isinstance(result, Rejected):
            errors.append(FieldError(field=rule.field, message=result.message))
        else:
            values[rule.field] = result.value

    if errors:
        return ValidationOutcome(errors=errors)
    return ValidationOutcome(draft=MenuItemDraft(**values))
