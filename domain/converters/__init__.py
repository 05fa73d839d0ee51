"""
Domain converters.

Pure helpers with no side effects:
- suffix_copy_name: "Week 1" -> "Week 1 (Copy)"
- numbered_copy_name: "Week 1" -> "Week 1 Copy 2" given existing siblings
"""

from domain.converters.copy_naming import base_name, numbered_copy_name, suffix_copy_name

__all__ = [
    "base_name",
    "numbered_copy_name",
    "suffix_copy_name",
]
