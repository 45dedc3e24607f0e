"""
OData rendering of pine options.

Only the subset of the pine option language emitted by the SDK and its
callers is supported: $select, $expand, $filter, $orderby, $top, $skip
and $count. Filters are nested dicts:

    {"uuid": {"$startswith": "7cf02a6"}}
        -> startswith(uuid,'7cf02a6')
    {"device": {"$any": {"$alias": "d", "$expr": {"d": {"belongs_to__application": 5}}}}}
        -> device/any(d:d/belongs_to__application eq 5)
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from devfleet.exceptions import InvalidParameterError
from devfleet.utils.options import PineOptions

_COMPARISONS = {
    "$eq": "eq",
    "$ne": "ne",
    "$gt": "gt",
    "$ge": "ge",
    "$lt": "lt",
    "$le": "le",
}
_FUNCTIONS = {
    "$startswith": "startswith",
    "$endswith": "endswith",
    "$contains": "contains",
}
_LAMBDAS = {"$any": "any", "$all": "all"}

# Options in the order they are rendered
_OPTION_ORDER = ("$select", "$expand", "$filter", "$orderby", "$top", "$skip", "$count")

_QUERY_SAFE = "$(),;'=/:*@"


def escape_value(value: Any) -> str:
    """Render a Python value as an OData literal."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    raise InvalidParameterError("$filter", value)


def escape_resource_key(key: Any) -> str:
    """Render a resource key: 5 -> 5, {"a": 1, "b": "x"} -> a=1,b='x'."""
    if isinstance(key, dict):
        return ",".join(f"{name}={escape_value(value)}" for name, value in key.items())
    return escape_value(key)


def _join(parts: list[str], operator: str) -> str:
    if len(parts) == 1:
        return parts[0]
    return f" {operator} ".join(f"({part})" for part in parts)


def _compile_logical(value: Any, operator: str, prefix: str) -> str:
    if isinstance(value, dict):
        parts = [_compile_filter({key: item}, prefix) for key, item in value.items()]
    elif isinstance(value, (list, tuple)):
        parts = [_compile_filter(item, prefix) for item in value]
    else:
        raise InvalidParameterError(f"${operator}", value)
    if not parts:
        raise InvalidParameterError(f"${operator}", value)
    return _join(parts, operator)


def _compile_lambda(path: str, name: str, operand: Any) -> str:
    if not isinstance(operand, dict) or "$alias" not in operand or "$expr" not in operand:
        raise InvalidParameterError(f"${name}", operand)
    alias = operand["$alias"]
    return f"{path}/{name}({alias}:{_compile_filter(operand['$expr'], '')})"


def _compile_field(path: str, value: Any) -> str:
    if not isinstance(value, dict):
        if isinstance(value, (list, tuple)):
            raise InvalidParameterError("$filter", value)
        return f"{path} eq {escape_value(value)}"

    parts: list[str] = []
    for key, operand in value.items():
        if key in _COMPARISONS:
            parts.append(f"{path} {_COMPARISONS[key]} {escape_value(operand)}")
        elif key in _FUNCTIONS:
            parts.append(f"{_FUNCTIONS[key]}({path},{escape_value(operand)})")
        elif key == "$in":
            values = operand if isinstance(operand, (list, tuple)) else [operand]
            if not values:
                raise InvalidParameterError("$filter", value)
            parts.append(f"{path} in ({','.join(escape_value(v) for v in values)})")
        elif key in _LAMBDAS:
            parts.append(_compile_lambda(path, _LAMBDAS[key], operand))
        elif key.startswith("$"):
            raise InvalidParameterError("$filter", key)
        else:
            # Navigation into a related resource
            parts.append(_compile_field(f"{path}/{key}", operand))
    if not parts:
        raise InvalidParameterError("$filter", value)
    return _join(parts, "and")


def _compile_filter(filter_: Any, prefix: str) -> str:
    if isinstance(filter_, (list, tuple)):
        return _compile_logical(filter_, "and", prefix)
    if not isinstance(filter_, dict) or not filter_:
        raise InvalidParameterError("$filter", filter_)

    parts: list[str] = []
    for key, value in filter_.items():
        if key == "$and":
            parts.append(_compile_logical(value, "and", prefix))
        elif key == "$or":
            parts.append(_compile_logical(value, "or", prefix))
        elif key == "$not":
            parts.append(f"not({_compile_filter(value, prefix)})")
        elif key == "$raw":
            parts.append(str(value))
        elif key.startswith("$"):
            raise InvalidParameterError("$filter", key)
        else:
            parts.append(_compile_field(f"{prefix}{key}", value))
    return _join(parts, "and")


def compile_filter(filter_: Any) -> str:
    """Render a pine $filter."""
    return _compile_filter(filter_, "")


def compile_select(select: Any) -> str:
    if isinstance(select, (list, tuple)):
        return ",".join(select)
    return str(select)


def compile_orderby(orderby: Any) -> str:
    if isinstance(orderby, str):
        return orderby
    if isinstance(orderby, dict):
        return ",".join(f"{field} {direction}" for field, direction in orderby.items())
    if isinstance(orderby, (list, tuple)):
        return ",".join(compile_orderby(item) for item in orderby)
    raise InvalidParameterError("$orderby", orderby)


def compile_expand(expand: Any) -> str:
    """Render a pine $expand, nested options separated by ';'."""
    if isinstance(expand, str):
        return expand
    if isinstance(expand, (list, tuple)):
        return ",".join(compile_expand(item) for item in expand)
    if isinstance(expand, dict):
        parts = []
        for navigation, options in expand.items():
            inner = _compile_parts(options or {})
            parts.append(f"{navigation}({';'.join(inner)})" if inner else navigation)
        return ",".join(parts)
    raise InvalidParameterError("$expand", expand)


def _compile_parts(options: PineOptions) -> list[str]:
    unknown = set(options) - set(_OPTION_ORDER)
    if unknown:
        raise InvalidParameterError("options", sorted(unknown)[0])

    parts = []
    for option in _OPTION_ORDER:
        if option not in options or options[option] is None:
            continue
        value = options[option]
        if option == "$select":
            rendered = compile_select(value)
        elif option == "$expand":
            rendered = compile_expand(value)
        elif option == "$filter":
            rendered = compile_filter(value)
        elif option == "$orderby":
            rendered = compile_orderby(value)
        elif option == "$count":
            rendered = "true" if value else "false"
        else:
            rendered = str(int(value))
        parts.append(f"{option}={rendered}")
    return parts


def compile_options(options: PineOptions | None) -> str:
    """
    Render options as a URL query string (without the leading '?').

    >>> compile_options({"$select": ["id", "uuid"], "$top": 1})
    '$select=id,uuid&$top=1'
    """
    if not options:
        return ""
    query = []
    for part in _compile_parts(options):
        name, _, value = part.partition("=")
        query.append(f"{name}={quote(value, safe=_QUERY_SAFE)}")
    return "&".join(query)


__all__ = [
    "escape_value",
    "escape_resource_key",
    "compile_filter",
    "compile_select",
    "compile_orderby",
    "compile_expand",
    "compile_options",
]
