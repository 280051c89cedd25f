"""Change notification between market data, curves and instruments.

Observables keep weak references to their observers and call ``update()`` on
each of them when they change. Instruments and engines observe their inputs and
mark cached results stale; nothing is recomputed until a result is requested.

Handles wrap a shared object (typically a term structure) so that engines can
be built before the object exists and so that the object can be swapped later.
A handle forwards the notifications of the object it links to.

Example:
    >>> curve_handle = RelinkableHandle()
    >>> curve_handle.empty()
    True
    >>> curve_handle.link_to(curve)
    >>> curve_handle.current_link() is curve
    True
"""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from typing import Generic, Protocol, TypeVar, runtime_checkable

from fxpoints.logging_config import get_logger

logger = get_logger(__name__)


@runtime_checkable
class Observer(Protocol):
    """Anything that can be told that an observed input changed."""

    def update(self) -> None:
        """React to a change in an observed input."""
        ...


class Observable:
    """Subject side of the notification mechanism.

    Observers are held weakly: an instrument that goes out of scope is dropped
    from every curve it was registered with.
    """

    def __init__(self) -> None:
        self._observers: weakref.WeakSet[Observer] = weakref.WeakSet()

    def register_observer(self, observer: Observer) -> None:
        self._observers.add(observer)

    def unregister_observer(self, observer: Observer) -> None:
        self._observers.discard(observer)

    def observer_count(self) -> int:
        return len(self._observers)

    def notify_observers(self) -> None:
        """Call ``update()`` on every registered observer.

        The set is copied first since observers may (un)register while being
        notified.
        """
        for observer in list(self._observers):
            observer.update()


class ObserverBase(ABC):
    """Observer that remembers what it registered with.

    Subclasses implement ``update``; ``register_with`` and
    ``unregister_with_all`` manage the subscriptions.
    """

    def __init__(self) -> None:
        self._observables: list[Observable] = []

    def register_with(self, observable: Observable | None) -> None:
        if observable is None:
            return
        observable.register_observer(self)
        if observable not in self._observables:
            self._observables.append(observable)

    def unregister_with(self, observable: Observable) -> None:
        observable.unregister_observer(self)
        if observable in self._observables:
            self._observables.remove(observable)

    def unregister_with_all(self) -> None:
        for observable in self._observables:
            observable.unregister_observer(self)
        self._observables.clear()

    @abstractmethod
    def update(self) -> None:
        """React to a change in an observed input."""


T = TypeVar("T", bound=Observable)


class Handle(Observable, ObserverBase, Generic[T]):
    """Shared reference to an observable object.

    Observers of the handle are notified both when the linked object notifies
    and when the handle is relinked. A plain Handle is linked once, at
    construction; use RelinkableHandle to swap the link.
    """

    def __init__(self, link: T | None = None) -> None:
        Observable.__init__(self)
        ObserverBase.__init__(self)
        self._link: T | None = None
        self._link_to(link)

    def _link_to(self, link: T | None) -> None:
        if link is self._link:
            return
        if self._link is not None:
            self.unregister_with(self._link)
        self._link = link
        if link is not None:
            self.register_with(link)
        self.notify_observers()

    def empty(self) -> bool:
        return self._link is None

    def current_link(self) -> T:
        """Return the linked object.

        Raises:
            ValueError: If the handle is empty
        """
        if self._link is None:
            raise ValueError("empty handle cannot be dereferenced")
        return self._link

    def update(self) -> None:
        self.notify_observers()

    def __bool__(self) -> bool:
        return self._link is not None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._link!r})"


class RelinkableHandle(Handle[T]):
    """Handle whose link can be replaced after construction."""

    def link_to(self, link: T | None) -> None:
        """Point the handle at another object and notify observers."""
        logger.debug(
            "Relinking handle",
            extra={"handle_id": id(self), "link": type(link).__name__ if link else None},
        )
        self._link_to(link)
