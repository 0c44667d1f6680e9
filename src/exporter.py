import json
import logging
import os
from typing import Any, Dict, Iterator, Set

from tqdm import tqdm

try:
    from .artworks_api import ArtworksClient
    from .models import Artwork
    from .page_selection import PageSelectionAdapter
    from .selection import SelectionTracker
except ImportError:
    from artworks_api import ArtworksClient
    from models import Artwork
    from page_selection import PageSelectionAdapter
    from selection import SelectionTracker


class SelectionExporter:
    """Write the records of the current selection to a JSON Lines file."""

    def __init__(self, client: ArtworksClient, config: Dict[str, Any], show_progress: bool = True):
        self.client = client
        self.config = config
        self.batch_size = min(config.get('export', {}).get('batch_size', 100), ArtworksClient.MAX_PAGE_SIZE)
        self.show_progress = show_progress
        self.logger = logging.getLogger(__name__)

    def iter_selected(self, tracker: SelectionTracker) -> Iterator[Artwork]:
        """
        Yield every selected artwork, prefix rows first, then the rows
        selected outside the prefix. Only one page is held at a time.
        """
        adapter = PageSelectionAdapter(tracker)
        seen: Set[int] = set()

        prefix_pages = -(-tracker.prefix_count // self.batch_size)
        progress = tqdm(total=prefix_pages, desc="Exporting", unit="pages", disable=not self.show_progress)
        try:
            for page_index in range(prefix_pages):
                page = self.client.fetch_page(page_index, self.batch_size)
                tracker.set_total_count(page.total_count)
                for artwork in adapter.selected_items_on_page(page.entries(), page_index, self.batch_size):
                    seen.add(artwork.id)
                    yield artwork
                progress.update(1)
                if not page.items:
                    break
        finally:
            progress.close()

        remaining = sorted(item_id for item_id in tracker.additional_selected if item_id not in seen)
        for start in range(0, len(remaining), self.batch_size):
            for artwork in self.client.fetch_by_ids(remaining[start:start + self.batch_size]):
                if artwork.id not in seen:
                    seen.add(artwork.id)
                    yield artwork

    def export(self, tracker: SelectionTracker, output_path: str) -> int:
        """
        Export selected artworks to output_path, one JSON object per line.

        Returns:
            Number of records written
        """
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        written = 0
        with open(output_path, 'w', encoding='utf-8') as f:
            for artwork in self.iter_selected(tracker):
                f.write(json.dumps(artwork.to_dict(), ensure_ascii=False) + "\n")
                written += 1

        expected = tracker.selected_count()
        if written != expected:
            self.logger.warning(f"Exported {written} artworks but {expected} are selected")
        self.logger.info(f"Exported {written} artworks to {output_path}")
        return written
