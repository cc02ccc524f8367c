"""Normalization of RTM's shape-inconsistent JSON.

The service collapses one-element collections into a bare object, so every
list-valued field must go through normalize_to_array before iteration.
"""

import logging
from typing import Any, Mapping, TypeVar, Union

T = TypeVar("T")

logger = logging.getLogger(__name__)


def normalize_to_array(value: Union[T, list[T], None]) -> list[T]:
    """Coerce a single item, a list, or None into a list.

    Idempotent: a list is returned as a (shallow) copy of itself.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def build_list_map(response: Mapping[str, Any]) -> dict[str, str]:
    """Fold an ``rtm.lists.getList`` envelope into a list id -> name map.

    Entries missing an id or a name are skipped silently; an unresolved
    list just renders without a list tag.
    """
    lists = (response.get("rsp") or {}).get("lists") or {}
    list_map: dict[str, str] = {}
    for entry in normalize_to_array(lists.get("list")):
        if not isinstance(entry, Mapping):
            continue
        list_id = entry.get("id")
        name = entry.get("name")
        if list_id and name:
            list_map[str(list_id)] = name
    logger.debug("Resolved %d list names", len(list_map))
    return list_map
