"""Observable store primitive shared by the registries."""

from framekit.core.store.observable import Listener, ObservableStore

__all__ = ["Listener", "ObservableStore"]
