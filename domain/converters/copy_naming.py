"""
Display names for duplicated roots.

Two strategies:
- suffix: "Week 1" -> "Week 1 (Copy)"; a nameless node becomes "Week (Copy)"
- numbered: "Week 1" -> "Week 1 Copy N" with the lowest N not already taken
  by a sibling; copying "Week 1 Copy 2" counts from the base name "Week 1"
"""

import re
from typing import Iterable, Optional

from domain.models.hierarchy import NodeKind

_COPY_NUMBER = re.compile(r"\s+Copy\s+(\d+)$")


def suffix_copy_name(name: Optional[str], kind: NodeKind) -> str:
    if name:
        return f"{name} (Copy)"
    return f"{kind.label} (Copy)"


def base_name(name: str) -> str:
    """Strip a trailing " Copy N" from name."""
    match = _COPY_NUMBER.search(name)
    return name[: match.start()] if match else name


def numbered_copy_name(
    name: Optional[str],
    kind: NodeKind,
    existing_names: Iterable[Optional[str]],
) -> str:
    """
    Next free "<base> Copy N" name.

    Examples:
        >>> numbered_copy_name("Week 1", NodeKind.WEEK, [])
        'Week 1 Copy 1'
        >>> numbered_copy_name("Week 1", NodeKind.WEEK, ["Week 1 Copy 1", "Week 1 Copy 3"])
        'Week 1 Copy 2'
        >>> numbered_copy_name("Week 1 Copy 1", NodeKind.WEEK, ["Week 1 Copy 1", "Week 1 Copy 2"])
        'Week 1 Copy 3'
    """
    base = base_name(name) if name else kind.label

    taken = set()
    for existing in existing_names:
        if not existing or not existing.startswith(base):
            continue
        match = _COPY_NUMBER.fullmatch(existing[len(base):])
        if match:
            taken.add(int(match.group(1)))

    number = 1
    while number in taken:
        number += 1
    return f"{base} Copy {number}"
