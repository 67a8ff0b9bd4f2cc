"""
Merges author-supplied annotation fragments onto generated descriptors.
"""
import copy
from collections import abc
from typing import Any, Dict, Iterable, List, Optional

from ..models.common import Descriptor


def union_required(computed: Iterable[str], extra: Iterable[str], property_order: Optional[Iterable[str]] = None) -> List[str]:
    """
    Union of two required-key lists. Keys that are properties keep the
    property declaration order; any other key follows in first-seen order.
    """
    keys: List[str] = []
    for key in list(computed) + list(extra):
        if key not in keys:
            keys.append(key)
    if property_order is None:
        return keys
    declared = [name for name in property_order if name in keys]
    return declared + [key for key in keys if key not in declared]


def _required_list(value: Any) -> List[str]:
    """Normalizes an annotation `required` value: None is empty, a bare key is one key."""
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, abc.Iterable):
        return [value]
    return list(value)


def merge(base: Descriptor, fragment: Optional[Dict[str, Any]]) -> Descriptor:
    """
    Returns a new descriptor with `fragment` laid over `base`.
    Every fragment field overrides the base one except `required`, which is
    unioned so an annotation can widen the required set but never drop a
    computed key.
    """
    merged = dict(base)
    if not fragment:
        return merged
    for field, value in fragment.items():
        if field == "required":
            property_order = base["properties"].keys() if "properties" in base else None
            merged["required"] = union_required(base.get("required", []), _required_list(value), property_order)
        else:
            merged[field] = copy.deepcopy(value)
    return merged
