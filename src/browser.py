import logging
import os
from typing import Any, Dict, List, Optional

import click

try:
    from .artworks_api import ArtworksClient
    from .exceptions import ArtworksAPIError, InvalidPrefixInput
    from .exporter import SelectionExporter
    from .models import ArtworkPage
    from .page_selection import PageSelectionAdapter
    from .selection import SelectionTracker, parse_prefix_input
    from .table_view import ArtworkTableRenderer
except ImportError:
    from artworks_api import ArtworksClient
    from exceptions import ArtworksAPIError, InvalidPrefixInput
    from exporter import SelectionExporter
    from models import ArtworkPage
    from page_selection import PageSelectionAdapter
    from selection import SelectionTracker, parse_prefix_input
    from table_view import ArtworkTableRenderer


def parse_row_selection(text: str, max_row: int) -> List[int]:
    """
    Parse a row list such as "1,3-5 8" into sorted 1-based row numbers.

    Raises ValueError for malformed entries, reversed ranges or rows outside 1..max_row.
    """
    rows = set()
    for part in text.replace(',', ' ').split():
        if '-' in part:
            start_text, _, end_text = part.partition('-')
            start, end = int(start_text), int(end_text)
            if start > end:
                raise ValueError(f"Invalid range: {part}")
            numbers = range(start, end + 1)
        else:
            numbers = [int(part)]
        for number in numbers:
            if not 1 <= number <= max_row:
                raise ValueError(f"Row {number} is outside 1-{max_row}")
            rows.add(number)
    if not rows:
        raise ValueError("No rows given")
    return sorted(rows)


class ArtworkBrowser:
    """Interactive paging through the artworks collection with "select first N" support."""

    def __init__(self, client: ArtworksClient, config: Dict[str, Any], page_size: Optional[int] = None,
                 tracker: Optional[SelectionTracker] = None):
        self.client = client
        self.config = config
        self.page_size = page_size or config['table']['page_size']
        self.tracker = tracker or SelectionTracker()
        self.adapter = PageSelectionAdapter(self.tracker)
        self.renderer = ArtworkTableRenderer(config)
        self.page: Optional[ArtworkPage] = None
        self.logger = logging.getLogger(__name__)

    # ---- paging ----

    def load_page(self, page_index: int) -> bool:
        """Fetch page_index; on failure the previously loaded page stays current."""
        if page_index < 0:
            click.echo("❌ Already at the first page")
            return False
        if self.page is not None and self.page.total_pages and page_index >= self.page.total_pages:
            click.echo(f"❌ Page {page_index + 1} is past the last page ({self.page.total_pages})")
            return False

        try:
            page = self.client.fetch_page(page_index, self.page_size)
        except ArtworksAPIError as e:
            self.logger.error(f"Error fetching artworks: {e}")
            click.echo(f"❌ Could not load page {page_index + 1}: {e}")
            return False

        self.page = page
        self.tracker.set_total_count(page.total_count)
        return True

    @property
    def page_index(self) -> int:
        return self.page.page_index if self.page else 0

    def next_page(self) -> bool:
        return self.load_page(self.page_index + 1)

    def previous_page(self) -> bool:
        return self.load_page(self.page_index - 1)

    def go_to_page(self, page_number: int) -> bool:
        """Go to a 1-based page number."""
        return self.load_page(page_number - 1)

    # ---- selection ----

    def selected_ids(self) -> set:
        if not self.page:
            return set()
        return self.adapter.selected_ids_on_page(self.page.entries(), self.page.page_index, self.page_size)

    def apply_selection(self, new_selected_ids) -> int:
        """Hand the page's new full selection to the adapter."""
        if not self.page:
            return 0
        return self.adapter.apply_page_selection_change(
            self.page.entries(), self.page.page_index, self.page_size, new_selected_ids
        )

    def toggle_rows(self, rows: List[int]) -> int:
        """Toggle 1-based rows of the current page."""
        if not self.page:
            return 0
        new_selected = self.selected_ids()
        for row in rows:
            item_id = self.page.items[row - 1].id
            if item_id in new_selected:
                new_selected.discard(item_id)
            else:
                new_selected.add(item_id)
        return self.apply_selection(new_selected)

    def select_all_on_page(self) -> int:
        if not self.page:
            return 0
        return self.apply_selection({artwork.id for artwork in self.page.items})

    def clear_page(self) -> int:
        return self.apply_selection(set())

    def select_first(self, value) -> bool:
        """Apply a "select first N" command; invalid input leaves the selection untouched."""
        try:
            count = parse_prefix_input(value)
        except InvalidPrefixInput as e:
            self.logger.debug(f"Ignoring select-first input {value!r}: {e}")
            click.echo(f"❌ {e}")
            return False
        self.tracker.set_prefix(count)
        click.echo(f"✅ Selected first {self.tracker.prefix_count} rows")
        return True

    # ---- output ----

    def display(self):
        if not self.page:
            click.echo("No page loaded.")
            return
        click.echo()
        self.renderer.display(self.page, self.selected_ids(), self.tracker.selected_count())

    def show_summary(self):
        snapshot = self.tracker.snapshot()
        click.echo("\n📋 Selection Summary:")
        click.echo("=" * 30)
        click.echo(f"Selected rows: {self.tracker.selected_count()}")
        click.echo(f"First N selected: {snapshot.prefix_count}")
        click.echo(f"Deselected inside first N: {len(snapshot.deselected)}")
        click.echo(f"Selected outside first N: {len(snapshot.additional_selected)}")
        if not self.tracker.has_exceptions():
            click.echo("No rows toggled individually since the last select-first")
        if snapshot.total_count is not None:
            click.echo(f"Total rows: {snapshot.total_count}")

    def export(self, output_path: Optional[str] = None) -> Optional[int]:
        if self.tracker.selected_count() == 0:
            click.echo("Nothing selected, nothing to export.")
            return None
        if not output_path:
            output_path = os.path.join(self.config['directories']['output_dir'],
                                       self.config['export']['output_filename'])
        exporter = SelectionExporter(self.client, self.config)
        try:
            written = exporter.export(self.tracker, output_path)
        except ArtworksAPIError as e:
            click.echo(f"❌ Export failed: {e}")
            return None
        click.echo(f"💾 Exported {written} artworks to: {output_path}")
        return written

    # ---- loop ----

    def _show_options(self):
        click.echo("\nOptions:")
        click.echo("  n / p        - Next / previous page")
        click.echo("  g <page>     - Go to page")
        click.echo("  t <rows>     - Toggle rows (e.g. t 1,3-5)")
        click.echo("  a            - Select all rows on this page")
        click.echo("  c            - Clear selection on this page")
        click.echo("  s <N>        - Select first N rows of the whole collection")
        click.echo("  i            - Show selection summary")
        click.echo("  e [file]     - Export selected artworks")
        click.echo("  r            - Reload page")
        click.echo("  q            - Quit")

    def handle_command(self, choice: str) -> bool:
        """Run one command. Returns False when the session should end."""
        command, _, argument = choice.strip().partition(' ')
        command = command.lower()
        argument = argument.strip()

        if command == 'q':
            return False
        elif command == 'n':
            if self.next_page():
                self.display()
        elif command == 'p':
            if self.previous_page():
                self.display()
        elif command == 'r':
            if self.load_page(self.page_index):
                self.display()
        elif command == 'g':
            try:
                page_number = int(argument)
            except ValueError:
                click.echo("❌ Invalid format. Use: g <page>")
                return True
            if self.go_to_page(page_number):
                self.display()
        elif command == 't':
            if not self.page or not self.page.items:
                click.echo("❌ No rows on this page.")
                return True
            try:
                rows = parse_row_selection(argument, len(self.page.items))
            except ValueError as e:
                click.echo(f"❌ {e}. Use: t <rows>, e.g. t 1,3-5")
                return True
            self.toggle_rows(rows)
            self.display()
        elif command == 'a':
            self.select_all_on_page()
            self.display()
        elif command == 'c':
            self.clear_page()
            self.display()
        elif command == 's':
            if self.select_first(argument):
                self.display()
        elif command == 'i':
            self.show_summary()
        elif command == 'e':
            self.export(argument or None)
        else:
            click.echo("❌ Invalid choice. Please try again.")
        return True

    def run(self, start_page: int = 1) -> SelectionTracker:
        """Run the interactive session and return the final selection."""
        if not self.go_to_page(start_page) and self.page is None:
            click.echo("❌ No artworks could be loaded.")
            return self.tracker
        self.display()

        while True:
            self._show_options()
            try:
                choice = click.prompt("Enter your choice", type=str)
            except (KeyboardInterrupt, click.Abort):
                click.echo("\nExiting...")
                break
            if not self.handle_command(choice):
                click.echo("Exiting...")
                break

        return self.tracker
