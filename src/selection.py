import logging
from dataclasses import dataclass
from typing import FrozenSet, Hashable, Optional, Set

try:
    from .exceptions import InvalidPrefixInput, SelectionInvariantError
except ImportError:
    from exceptions import InvalidPrefixInput, SelectionInvariantError


@dataclass(frozen=True)
class SelectionSnapshot:
    """Immutable copy of the stored selection state."""
    prefix_count: int
    additional_selected: FrozenSet[Hashable]
    deselected: FrozenSet[Hashable]
    total_count: Optional[int] = None


class SelectionTracker:
    """
    Tracks a "select first N" prefix plus per-item exceptions over a collection
    that is only ever seen one page at a time.

    The state is one integer and two id sets:
    - prefix_count: items at global index 0..N-1 are selected by default
    - additional_selected: ids selected outside the prefix
    - deselected: ids excluded inside the prefix

    Nothing about fetched pages is stored, so memory grows with the number of
    exceptions rather than with the size of the collection.
    """

    def __init__(self, total_count: Optional[int] = None):
        self.prefix_count = 0
        self.additional_selected: Set[Hashable] = set()
        self.deselected: Set[Hashable] = set()
        self.total_count: Optional[int] = None
        self.logger = logging.getLogger(__name__)

        if total_count is not None:
            self.set_total_count(total_count)

    def set_total_count(self, total_count: int):
        """Record the collection size reported by the page source."""
        if total_count < 0:
            raise ValueError(f"Total count cannot be negative: {total_count}")
        if total_count != self.total_count:
            self.logger.debug(f"Total count changed: {self.total_count} -> {total_count}")
        self.total_count = total_count

        # The collection shrank underneath an existing prefix
        if self.prefix_count > total_count:
            self.logger.warning(f"Prefix {self.prefix_count} exceeds new total {total_count}, clamping")
            self.prefix_count = total_count

        # Exceptions recorded against the old total can no longer be trusted
        count = self.prefix_count - len(self.deselected) + len(self.additional_selected)
        if self.has_exceptions() and not 0 <= count <= total_count:
            self.logger.warning(f"Selected count {count} no longer fits total {total_count}, "
                                f"dropping {len(self.deselected) + len(self.additional_selected)} row exceptions")
            self.additional_selected = set()
            self.deselected = set()

    def set_prefix(self, n: int):
        """
        Select the first n items of the collection and forget every exception.

        Args:
            n: Number of leading items to select, clamped to the known total
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise InvalidPrefixInput(f"Prefix must be a non-negative integer, got {n!r}")

        if self.total_count is not None and n > self.total_count:
            self.logger.debug(f"Clamping prefix {n} to total count {self.total_count}")
            n = self.total_count

        self.prefix_count = n
        self.additional_selected = set()
        self.deselected = set()
        self.logger.info(f"Selected first {n} items")

        if __debug__:
            self.check_invariants()

    def reset(self):
        """Return to the empty selection."""
        self.prefix_count = 0
        self.additional_selected = set()
        self.deselected = set()

    def is_selected(self, item_id: Hashable, global_index: int) -> bool:
        """Check whether the item at global_index is selected."""
        if item_id in self.additional_selected:
            return True
        if item_id in self.deselected:
            return False
        return global_index < self.prefix_count

    def set_item_selected(self, item_id: Hashable, global_index: int, selected: bool):
        """Apply a single toggle. Applying the same call twice is a no-op."""
        in_prefix = global_index < self.prefix_count

        if selected:
            if in_prefix:
                self.deselected.discard(item_id)
            else:
                self.additional_selected.add(item_id)
                self.deselected.discard(item_id)
        else:
            if in_prefix:
                self.deselected.add(item_id)
                self.additional_selected.discard(item_id)
            else:
                self.additional_selected.discard(item_id)

        if __debug__:
            self.check_invariants()

    def selected_count(self) -> int:
        """Number of selected items across the whole collection."""
        count = self.prefix_count - len(self.deselected) + len(self.additional_selected)
        if __debug__:
            self._check_count(count)
        return count

    def has_exceptions(self) -> bool:
        return bool(self.additional_selected or self.deselected)

    def snapshot(self) -> SelectionSnapshot:
        return SelectionSnapshot(
            prefix_count=self.prefix_count,
            additional_selected=frozenset(self.additional_selected),
            deselected=frozenset(self.deselected),
            total_count=self.total_count,
        )

    def check_invariants(self):
        """Raise SelectionInvariantError if the stored state is inconsistent."""
        overlap = self.additional_selected & self.deselected
        if overlap:
            raise SelectionInvariantError(
                f"Ids both selected and deselected: {sorted(overlap, key=repr)[:10]}"
            )
        if self.prefix_count < 0:
            raise SelectionInvariantError(f"Negative prefix count: {self.prefix_count}")
        if self.total_count is not None and self.prefix_count > self.total_count:
            raise SelectionInvariantError(
                f"Prefix count {self.prefix_count} exceeds total count {self.total_count}"
            )
        self._check_count(self.prefix_count - len(self.deselected) + len(self.additional_selected))

    def _check_count(self, count: int):
        upper = self.total_count if self.total_count is not None else count
        if count < 0 or count > upper:
            raise SelectionInvariantError(
                f"Selected count {count} outside [0, {self.total_count}] "
                f"(prefix={self.prefix_count}, deselected={len(self.deselected)}, "
                f"additional={len(self.additional_selected)})"
            )

    def __repr__(self) -> str:
        return (f"SelectionTracker(prefix_count={self.prefix_count}, "
                f"additional={len(self.additional_selected)}, "
                f"deselected={len(self.deselected)}, total={self.total_count})")


def parse_prefix_input(value) -> int:
    """
    Parse the user's "select first N" input.

    Accepts integers and integral numeric strings ("25", " 25 ", "25.0").
    Raises InvalidPrefixInput for anything non-numeric, fractional or <= 0.
    """
    if isinstance(value, bool):
        raise InvalidPrefixInput(f"Not a number: {value!r}")

    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip()
        try:
            number = int(text)
        except ValueError:
            try:
                as_float = float(text)
            except ValueError:
                raise InvalidPrefixInput(f"Not a number: {value!r}")
            if as_float != as_float or as_float in (float('inf'), float('-inf')) or not as_float.is_integer():
                raise InvalidPrefixInput(f"Not a whole number: {value!r}")
            number = int(as_float)

    if number <= 0:
        raise InvalidPrefixInput(f"Number of rows must be greater than zero, got {number}")
    return number
