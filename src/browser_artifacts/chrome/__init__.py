"""Chrome data types shared across export formats."""

from browser_artifacts.chrome.transition import (
    CoreTransition,
    TransitionQualifier,
    core_type,
    qualifiers,
    transition_from_string,
    transition_name,
)

__all__ = [
    "CoreTransition",
    "TransitionQualifier",
    "core_type",
    "qualifiers",
    "transition_from_string",
    "transition_name",
]
