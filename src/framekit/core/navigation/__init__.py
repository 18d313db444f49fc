"""Navigator handles and the per-app handle table."""

from framekit.core.navigation.handle import (
    NavigatorHandle,
    NavigatorTable,
    RecordingNavigator,
    Route,
)

__all__ = ["NavigatorHandle", "NavigatorTable", "RecordingNavigator", "Route"]
