"""Input validation: rejects bad user input before any algorithm runs.

Raw values arrive as typed-in strings or numbers. Each ``parse_*`` helper
validates one kind of argument through a pydantic model and either returns
the cleaned value or raises ``InputValidationError``. No trace is produced
for rejected input.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .structure_types import HeapKind

logger = logging.getLogger(__name__)


class InputValidationError(ValueError):
    """Raised when operation arguments are missing or malformed."""


def _strip_required(value: Any) -> Any:
    if value is None:
        raise ValueError("a value is required")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("a value is required")
    return value


# ── Schemas ──────────────────────────────────────────────────────


class NumberInput(BaseModel):
    value: Union[int, Annotated[float, Field(allow_inf_nan=False)]]

    @field_validator("value", mode="before")
    @classmethod
    def check_required(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("booleans are not numbers")
        return _strip_required(value)

    @property
    def number(self) -> int | float:
        if isinstance(self.value, int):
            return self.value
        return int(self.value) if self.value.is_integer() else self.value


class KeyInput(BaseModel):
    key: str

    @field_validator("key", mode="before")
    @classmethod
    def normalize_key(cls, value: Any) -> Any:
        value = _strip_required(value)
        return value.lower() if isinstance(value, str) else value


class TextInput(BaseModel):
    text: str

    @field_validator("text", mode="before")
    @classmethod
    def check_required(cls, value: Any) -> Any:
        return _strip_required(value)


class ExpressionInput(BaseModel):
    """Free-form expression text; may be empty but must be a string."""

    expression: str = Field(strict=True)


class HeapKindInput(BaseModel):
    kind: HeapKind


class NodeIdInput(BaseModel):
    node_id: str

    @field_validator("node_id", mode="before")
    @classmethod
    def check_required(cls, value: Any) -> Any:
        return _strip_required(value)


class PositionInput(BaseModel):
    position: int = Field(ge=0)

    @field_validator("position", mode="before")
    @classmethod
    def check_required(cls, value: Any) -> Any:
        return _strip_required(value)


class CapacityInput(BaseModel):
    capacity: int = Field(ge=1)

    @field_validator("capacity", mode="before")
    @classmethod
    def check_required(cls, value: Any) -> Any:
        return _strip_required(value)


class EdgeInput(BaseModel):
    source: str
    target: str
    weight: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("source", "target", "weight", mode="before")
    @classmethod
    def check_required(cls, value: Any) -> Any:
        return _strip_required(value)


# ── Parsing helpers ──────────────────────────────────────────────


def _validate(model: type[BaseModel], **fields: Any) -> Any:
    try:
        return model(**fields)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
            for err in exc.errors()
        )
        logger.info("Rejected %s input %r: %s", model.__name__, fields, problems)
        raise InputValidationError(f"Invalid input ({problems})") from exc


def parse_number(raw: Any) -> int | float:
    """Parse a finite number; integral values come back as ``int``."""
    return _validate(NumberInput, value=raw).number


def parse_key(raw: Any) -> str:
    """Parse a non-empty hash key, lowercased."""
    return _validate(KeyInput, key=raw).key


def parse_text(raw: Any) -> str:
    return _validate(TextInput, text=raw).text


def parse_expression(raw: Any) -> str:
    """Parse an expression for bracket matching; an empty string is allowed."""
    return _validate(ExpressionInput, expression=raw).expression


def parse_heap_kind(raw: Any) -> HeapKind:
    if isinstance(raw, str):
        raw = raw.strip().lower()
    return _validate(HeapKindInput, kind=raw).kind


def parse_node_id(raw: Any) -> str:
    return _validate(NodeIdInput, node_id=raw).node_id


def parse_position(raw: Any) -> int:
    return _validate(PositionInput, position=raw).position


def parse_capacity(raw: Any) -> int:
    return _validate(CapacityInput, capacity=raw).capacity


def parse_edge(source: Any, target: Any, weight: Any) -> tuple[str, str, int | float]:
    """Parse an edge; the weight must be a finite non-negative number."""
    parsed = _validate(EdgeInput, source=source, target=target, weight=weight)
    weight_value = parsed.weight
    if weight_value.is_integer():
        weight_value = int(weight_value)
    return parsed.source, parsed.target, weight_value
