"""Dense cell index for Rixel grids."""

from typing import Iterator, List, Optional, Tuple

from .cell import CellPosition, GridExtent

# Opaque identifier of an externally owned object (tile, agent, ...).
Handle = int


class Grid:
    """
    Maps every cell of an extent to an optional object handle.

    Slots are stored row-major, index-compatible with CellPosition.to_index.
    The grid only stores handles; it never owns the objects they refer to.

    Two tiers of access:
    - get/set/remove trust the caller and raise IndexError for positions
      outside the extent.
    - checked_get/checked_set/checked_remove accept any position and ignore
      the ones outside the extent.
    """

    def __init__(self, extent: GridExtent):
        self.extent = extent
        self._slots: List[Optional[Handle]] = [None] * extent.cell_count

    @classmethod
    def empty(cls, extent: GridExtent) -> "Grid":
        return cls(extent)

    @property
    def width(self) -> int:
        return self.extent.width

    @property
    def height(self) -> int:
        return self.extent.height

    def _index(self, pos: CellPosition) -> int:
        if not pos.within_bounds(self.extent):
            raise IndexError(
                f"{pos!r} outside {self.extent.width}x{self.extent.height} grid")
        return pos.to_index(self.extent)

    def get(self, pos: CellPosition) -> Optional[Handle]:
        return self._slots[self._index(pos)]

    def set(self, pos: CellPosition, handle: Handle) -> None:
        self._slots[self._index(pos)] = handle

    def remove(self, pos: CellPosition) -> None:
        self._slots[self._index(pos)] = None

    def checked_get(self, pos: CellPosition) -> Optional[Handle]:
        if not pos.within_bounds(self.extent):
            return None
        return self._slots[pos.to_index(self.extent)]

    def checked_set(self, pos: CellPosition, handle: Handle) -> None:
        if pos.within_bounds(self.extent):
            self._slots[pos.to_index(self.extent)] = handle

    def checked_remove(self, pos: CellPosition) -> None:
        if pos.within_bounds(self.extent):
            self._slots[pos.to_index(self.extent)] = None

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Optional[Handle]]:
        """Iterate slots in row-major storage order."""
        return iter(self._slots)

    def items(self) -> Iterator[Tuple[CellPosition, Optional[Handle]]]:
        for index, handle in enumerate(self._slots):
            yield CellPosition.from_index(index, self.extent), handle

    def occupied_positions(self) -> List[CellPosition]:
        """Return positions holding a handle, in row-major order."""
        return [pos for pos, handle in self.items() if handle is not None]

    def find(self, handle: Handle) -> Optional[CellPosition]:
        """Return the first position holding handle."""
        try:
            index = self._slots.index(handle)
        except ValueError:
            return None
        return CellPosition.from_index(index, self.extent)

    def clear(self) -> None:
        for index in range(len(self._slots)):
            self._slots[index] = None
