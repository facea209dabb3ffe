"""
Interaction package.

Public API:
- InteractionController (the one entry point a UI shell talks to)
- InteractionPolicy, ErrorPolicy
- DirectionsPanel, ErrorIndicator view models
"""
from .controller import InteractionController
from .policy import InteractionPolicy, ErrorPolicy, default_interaction_policy
from .display import DirectionsPanel, ErrorIndicator, format_km
from .sequencing import RequestSequencer

__all__ = [
    "InteractionController",
    "InteractionPolicy",
    "ErrorPolicy",
    "default_interaction_policy",
    "DirectionsPanel",
    "ErrorIndicator",
    "format_km",
    "RequestSequencer",
]
