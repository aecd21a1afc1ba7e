"""The three-valued result of a comparison."""

from __future__ import annotations

from enum import StrEnum


class Order(StrEnum):
    """Outcome of comparing a left operand against a right operand.

    ``INCREASING`` means the left operand sorts first, ``DECREASING``
    means it sorts last.
    """

    INCREASING = "increasing"
    EQUAL = "equal"
    DECREASING = "decreasing"
