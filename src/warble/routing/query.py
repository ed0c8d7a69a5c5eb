"""Query string building for generated URLs.

Parameters left over after path substitution become the query string.
Nested lists and mappings use bracket keys (``tags[0]=a&tags[1]=b``,
``filter[kind]=x``) so they survive a round trip through frameworks
that parse that convention.
"""

from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import urlencode


def stringify(value: Any) -> str:
    """Render a parameter value for a path or query string.

    ``True`` becomes ``"1"`` and ``False`` the empty string. Integral
    floats drop their fraction (``2.0`` -> ``"2"``). Everything else
    uses ``str()``.
    """
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def filter_parameters(parameters: Mapping[Any, Any]) -> dict[Any, Any]:
    """Drop ``None`` values and empty containers, at any depth.

    Sequences become index-keyed dicts so surviving items keep their
    original position (``[a, None, b]`` -> ``{0: a, 2: b}``).
    """
    filtered: dict[Any, Any] = {}
    for key, value in parameters.items():
        if _is_sequence(value):
            value = dict(enumerate(value))
        if isinstance(value, Mapping):
            value = filter_parameters(value)
            if not value:
                continue
        elif value is None:
            continue
        filtered[key] = value
    return filtered


def _flatten(value: Any, key: str) -> Iterator[tuple[str, str]]:
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            yield from _flatten(sub_value, f"{key}[{sub_key}]")
    else:
        yield key, stringify(value)


def build_query(parameters: Mapping[str, Any]) -> str:
    """Encode *parameters* as a query string, without the leading ``?``.

    Returns an empty string when nothing survives filtering.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in filter_parameters(parameters).items():
        pairs.extend(_flatten(value, str(key)))
    return urlencode(pairs)
