"""Turn loosely typed search arguments into path fragments.

Callers may pass a single identifier (``6354884`` or ``"6354884"``), a list
of identifiers, a free-form filter expression (``"name=Star*"``), or nothing.
``identify`` classifies the input once; ``normalize`` renders the result.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union

from bestbuy.base import InvalidArgumentError

RESOURCE_ID_PATTERN = re.compile(r"^(cat|pcmcat|abcat)\d+$")


class QueryMode(Enum):
    SKU = "sku"
    STORE = "storeId"
    RESOURCE = None

    @property
    def field(self) -> Optional[str]:
        return self.value


@dataclass(frozen=True)
class Single:
    value: str


@dataclass(frozen=True)
class Many:
    values: Tuple[str, ...]


@dataclass(frozen=True)
class Filter:
    expression: str


@dataclass(frozen=True)
class Empty:
    pass


Identifier = Union[Single, Many, Filter, Empty]


def _is_digits(value: str) -> bool:
    return value.isascii() and value.isdigit()


def identify(value: Any, *, resource_ids: bool = False) -> Identifier:
    """Classify a caller-supplied search argument.

    With ``resource_ids`` set, category codes such as ``abcat0100000`` are
    treated as direct lookups, the same as a string of digits.
    """
    if isinstance(value, (Single, Many, Filter, Empty)):
        return value
    if value is None or value == "":
        return Empty()
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Unsupported identifier: {value!r}")
    if isinstance(value, int):
        return Single(str(value))
    if isinstance(value, (list, tuple)):
        if not value:
            return Empty()
        return Many(tuple(str(item) for item in value))
    if isinstance(value, str):
        if _is_digits(value) or (resource_ids and RESOURCE_ID_PATTERN.match(value)):
            return Single(value)
        return Filter(value)
    raise InvalidArgumentError(f"Unsupported identifier type: {type(value).__name__}")


def in_clause(field: str, values: Tuple[str, ...]) -> str:
    return f"{field} in({','.join(values)})"


def normalize(value: Any, mode: QueryMode) -> str:
    """Render a search argument as a path fragment for ``mode``.

    SKU and STORE modes always produce an ``in(...)`` clause for identifiers;
    RESOURCE mode yields the bare identifier and rejects lists.
    """
    identifier = identify(value, resource_ids=mode is QueryMode.RESOURCE)
    if isinstance(identifier, Empty):
        return ""
    if isinstance(identifier, Filter):
        return identifier.expression
    values = (identifier.value,) if isinstance(identifier, Single) else identifier.values
    if mode.field is None:
        if isinstance(identifier, Many):
            raise InvalidArgumentError("A list of identifiers cannot address a single resource")
        return identifier.value
    return in_clause(mode.field, values)
