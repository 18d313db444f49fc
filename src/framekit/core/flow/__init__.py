"""Flow registry and progress tracking."""

from framekit.core.flow.progress import DEFAULT_KEY_PREFIX, FlowProgressStore
from framekit.core.flow.registry import FlowDefinitionError, FlowRegistry

__all__ = [
    "DEFAULT_KEY_PREFIX",
    "FlowDefinitionError",
    "FlowProgressStore",
    "FlowRegistry",
]
