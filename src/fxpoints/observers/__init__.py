"""Change notification between market data, curves and instruments."""

from fxpoints.observers.observable import (
    Handle,
    Observable,
    Observer,
    ObserverBase,
    RelinkableHandle,
)

__all__ = [
    "Observer",
    "Observable",
    "ObserverBase",
    "Handle",
    "RelinkableHandle",
]
