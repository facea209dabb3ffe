"""
Purpose: Central configuration for the interaction layer.

ERROR_POLICY = surface | log_and_ignore
Both search panels start hidden.

Rule: No logic here, just parameters.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from common.config import settings


class ErrorPolicy(str, Enum):
    # log the failure and leave the screen exactly as it was
    LOG_AND_IGNORE = "log_and_ignore"
    # additionally expose a transient ErrorIndicator
    SURFACE = "surface"


@dataclass(frozen=True)
class InteractionPolicy:
    error_policy: ErrorPolicy = ErrorPolicy.SURFACE
    start_panel_visible: bool = False
    end_panel_visible: bool = False

    def validate(self) -> None:
        if not isinstance(self.error_policy, ErrorPolicy):
            raise ValueError(f"error_policy must be an ErrorPolicy, got {self.error_policy!r}")


def default_interaction_policy() -> InteractionPolicy:
    p = InteractionPolicy(error_policy=ErrorPolicy(settings.ERROR_POLICY.lower()))
    p.validate()
    return p
