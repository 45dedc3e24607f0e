"""
Pine option merging.

Services build a set of default options for each query and let callers
pass extra options on top. merge_pine_options() combines the two the way
the API expects:

    >>> merge_pine_options(
    ...     {"$select": "id", "$filter": {"is_online": True}},
    ...     {"$select": ["uuid"], "$filter": {"device_type": "raspberrypi3"}},
    ... )
    {'$select': ['id', 'uuid'], '$filter': {'$and': [{'is_online': True}, {'device_type': 'raspberrypi3'}]}}
"""

from __future__ import annotations

import copy
from typing import Any

from devfleet.exceptions import InvalidParameterError

PineOptions = dict[str, Any]

# Options where the caller's value simply wins
_REPLACED_OPTIONS = ("$orderby", "$top", "$skip", "$count")


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _merge_select(default_select: Any, extra_select: Any) -> Any:
    extra = _as_list(extra_select)
    if extra and extra[0] == "*":
        return "*"
    merged: list[Any] = []
    for field in _as_list(default_select) + extra:
        if field not in merged:
            merged.append(field)
    return merged


def _normalize_expand(expand: Any) -> dict[str, PineOptions]:
    """Convert any $expand shape into {navigation: options}."""
    if expand is None:
        return {}
    if isinstance(expand, str):
        return {expand: {}}
    if isinstance(expand, dict):
        return {key: dict(value or {}) for key, value in expand.items()}
    if isinstance(expand, (list, tuple)):
        result: dict[str, PineOptions] = {}
        for item in expand:
            for key, value in _normalize_expand(item).items():
                result[key] = merge_pine_options(result.get(key, {}), value)
        return result
    raise InvalidParameterError("$expand", expand)


def _merge_expand(default_expand: Any, extra_expand: Any) -> dict[str, PineOptions]:
    result = _normalize_expand(default_expand)
    for key, value in _normalize_expand(extra_expand).items():
        result[key] = merge_pine_options(result.get(key, {}), value)
    return result


def merge_pine_options(
    defaults: PineOptions | None,
    extras: PineOptions | None,
) -> PineOptions:
    """
    Merge caller supplied options into a service's default options.

    Args:
        defaults: Options the SDK needs for the query
        extras: Options supplied by the caller

    Returns:
        New options dict; neither argument is modified

    Raises:
        InvalidParameterError: If extras contains an unknown option
    """
    result: PineOptions = copy.deepcopy(defaults) if defaults else {}
    if not extras:
        return result

    for option, value in extras.items():
        if option == "$select":
            if value is not None:
                result["$select"] = _merge_select(result.get("$select"), value)
        elif option in _REPLACED_OPTIONS:
            result[option] = copy.deepcopy(value)
        elif option == "$filter":
            if result.get("$filter"):
                result["$filter"] = {"$and": [result["$filter"], copy.deepcopy(value)]}
            else:
                result["$filter"] = copy.deepcopy(value)
        elif option == "$expand":
            result["$expand"] = _merge_expand(result.get("$expand"), value)
        else:
            raise InvalidParameterError("options", option)

    return result


__all__ = ["PineOptions", "merge_pine_options"]
