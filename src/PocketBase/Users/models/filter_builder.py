# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Builder for PocketBase filter expressions.

Clauses are rendered verbatim as ``field + operator + value`` and joined with
``&&`` inside a pair of parentheses.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from ..core.errors import ValidationError
from ..core._error_codes import VALIDATION_FILTER_EMPTY


class FilterOperator(str, Enum):
    """Comparison tokens of the PocketBase filter syntax.

    The ``ANY_*`` variants match when any element of an array-valued field
    satisfies the comparison.
    """

    EQUAL = "="
    NOT_EQUAL = "!="
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN_OR_EQUAL = "<="
    LIKE = "~"
    NOT_LIKE = "!~"
    AND = "&&"
    OR = "||"
    ANY_EQUAL = "?="
    ANY_NOT_EQUAL = "?!="
    ANY_LIKE = "?~"
    ANY_NOT_LIKE = "?!~"
    ANY_GREATER_THAN = "?>"
    ANY_LESS_THAN = "?<"
    ANY_GREATER_THAN_OR_EQUAL = "?>="
    ANY_LESS_THAN_OR_EQUAL = "?<="


class FilterBuilder:
    """
    Fluent builder for AND-joined filter expressions.

    Values are appended as given; string literals must be quoted by the
    caller, for example with :meth:`quote`.

    Example::

        expr = (FilterBuilder()
                .add("age", FilterOperator.GREATER_THAN, "18")
                .add("role", FilterOperator.EQUAL, "'admin'")
                .build())
        # '(age>18 && role='admin')'
    """

    def __init__(self) -> None:
        self._clauses: List[str] = []

    def add(self, field: str, operator: FilterOperator, value: str) -> "FilterBuilder":
        """
        Append one ``field``/``operator``/``value`` clause.

        :param field: Field reference, e.g. ``"username"`` or ``"expand.team.name"``.
        :type field: str
        :param operator: Comparison token.
        :type operator: FilterOperator
        :param value: Right-hand side, appended verbatim.
        :type value: str
        :return: Self for method chaining.
        :rtype: FilterBuilder
        :raises TypeError: If ``operator`` is not a :class:`FilterOperator`.
        """
        if not isinstance(operator, FilterOperator):
            raise TypeError(f"operator must be a FilterOperator, got {type(operator).__name__}")
        self._clauses.append(f"{field}{operator.value}{value}")
        return self

    @property
    def clauses(self) -> List[str]:
        return list(self._clauses)

    def build(self) -> str:
        """
        Render the clauses as ``(c1 && c2 && ...)``.

        :return: Filter expression.
        :rtype: str
        :raises ValidationError: If no clause was added.
        """
        if not self._clauses:
            raise ValidationError("filter has no clauses", subcode=VALIDATION_FILTER_EMPTY)
        return "(" + " && ".join(self._clauses) + ")"

    @staticmethod
    def quote(value: str) -> str:
        """Render ``value`` as a single-quoted filter literal, escaping embedded quotes."""
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"

    def __len__(self) -> int:
        return len(self._clauses)


__all__ = ["FilterOperator", "FilterBuilder"]
