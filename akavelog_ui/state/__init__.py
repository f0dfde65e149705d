"""Owner + observer state cells."""

from .cell import CellView, StateCell

__all__ = ["CellView", "StateCell"]
