"""Owned state cells with change notification.

Each kind of dashboard state (schema, form, input list, log buffer, upload
status, error slot) lives in one ``StateCell``. The component that creates
the cell is its only writer; everything else gets a read-only ``CellView``
and subscribes to be told when to redraw.
"""

from __future__ import annotations

from typing import Callable, Generic, List, TypeVar

from akavelog_ui.logging_config import get_logger

logger = get_logger(name=__name__)

T = TypeVar("T")

Observer = Callable[[T], None]


class CellView(Generic[T]):
    """Read-only handle on a ``StateCell``."""

    def __init__(self, cell: "StateCell[T]") -> None:
        self._cell = cell

    @property
    def name(self) -> str:
        return self._cell.name

    @property
    def value(self) -> T:
        return self._cell.value

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        return self._cell.subscribe(observer)


class StateCell(Generic[T]):
    """A mutable value that notifies observers every time it is set."""

    def __init__(self, name: str, initial: T) -> None:
        self.name = name
        self._value = initial
        self._observers: List[Observer] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self._notify()

    def view(self) -> CellView[T]:
        return CellView(self)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer``; returns a callable that unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self._value)
            except Exception as e:
                logger.warning("Observer of {} failed: {}", self.name, e)
