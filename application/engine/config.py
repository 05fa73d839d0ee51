"""
Engine configuration passed explicitly into use cases.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from application.engine.batch_writer import DEFAULT_MAX_OPERATIONS
from domain.models.copy_policy import StrengthWeightPolicy


class CopyNaming(str, Enum):
    SUFFIX = "suffix"
    NUMBERED = "numbered"


class RootOrdering(str, Enum):
    APPEND = "append"
    PRESERVE = "preserve"


@dataclass(frozen=True)
class EngineConfig:
    """Tunables for duplication and cascades."""

    batch_max_operations: int = DEFAULT_MAX_OPERATIONS
    read_max_workers: int = 8
    strength_weight_policy: StrengthWeightPolicy = StrengthWeightPolicy.RESET
    copy_naming: CopyNaming = CopyNaming.SUFFIX
    root_ordering: RootOrdering = RootOrdering.APPEND
    duplication_audit_enabled: bool = True

    @classmethod
    def from_settings(cls, settings: Any) -> "EngineConfig":
        """Build from backend.settings.Settings."""
        return cls(
            batch_max_operations=settings.batch_max_operations,
            read_max_workers=settings.read_max_workers,
            strength_weight_policy=StrengthWeightPolicy(settings.strength_weight_policy),
            copy_naming=CopyNaming(settings.copy_naming),
            root_ordering=RootOrdering(settings.root_ordering),
            duplication_audit_enabled=settings.duplication_audit_enabled,
        )
