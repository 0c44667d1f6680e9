import logging
from typing import Any, Hashable, Iterable, List, Sequence, Set, Tuple

try:
    from .selection import SelectionTracker
except ImportError:
    from selection import SelectionTracker


PageEntries = Sequence[Tuple[Hashable, Any]]


class PageSelectionAdapter:
    """Bridge one fetched page of (id, item) entries to and from a SelectionTracker."""

    def __init__(self, tracker: SelectionTracker):
        self.tracker = tracker
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def global_index(page_index: int, page_size: int, offset: int) -> int:
        """Position of the entry at offset on page_index in the full collection."""
        if page_size <= 0:
            raise ValueError(f"Page size must be positive, got {page_size}")
        if page_index < 0 or offset < 0:
            raise ValueError(f"Invalid page position: page {page_index}, offset {offset}")
        return page_index * page_size + offset

    def selected_items_on_page(self, page_items: PageEntries, page_index: int, page_size: int) -> List[Any]:
        """Items on the page that are selected, in page order."""
        return [
            item
            for offset, (item_id, item) in enumerate(page_items)
            if self.tracker.is_selected(item_id, self.global_index(page_index, page_size, offset))
        ]

    def selected_ids_on_page(self, page_items: PageEntries, page_index: int, page_size: int) -> Set[Hashable]:
        return {
            item_id
            for offset, (item_id, _) in enumerate(page_items)
            if self.tracker.is_selected(item_id, self.global_index(page_index, page_size, offset))
        }

    def apply_page_selection_change(self, page_items: PageEntries, page_index: int, page_size: int,
                                    new_selected_ids: Iterable[Hashable]) -> int:
        """
        Reconcile the tracker with the page's new full selection.

        Args:
            page_items: Entries shown on the page, in order
            page_index: Zero-based page number
            page_size: Rows per page used to compute global indices
            new_selected_ids: Every id that should now be selected on this page

        Returns:
            Number of per-item mutations applied
        """
        new_selected_ids = set(new_selected_ids)
        changes = 0

        for offset, (item_id, _) in enumerate(page_items):
            global_index = self.global_index(page_index, page_size, offset)
            was_selected = self.tracker.is_selected(item_id, global_index)
            is_selected_now = item_id in new_selected_ids
            if was_selected != is_selected_now:
                self.tracker.set_item_selected(item_id, global_index, is_selected_now)
                changes += 1

        if changes:
            self.logger.debug(f"Applied {changes} selection changes on page {page_index}")
        return changes
