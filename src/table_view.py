from typing import Any, Dict, Hashable, List, Optional, Set

import click

try:
    from .models import Artwork, ArtworkPage
    from .utils import truncate_text
except ImportError:
    from models import Artwork, ArtworkPage
    from utils import truncate_text


EMPTY_CELL = "—"

COLUMNS = [
    ('title', 'Title'),
    ('place_of_origin', 'Place of Origin'),
    ('artist_display', 'Artist'),
    ('inscriptions', 'Inscriptions'),
    ('date_start', 'Date Start'),
    ('date_end', 'Date End'),
]


class ArtworkTableRenderer:
    """Print a page of artworks as a plain-text table with selection markers."""

    def __init__(self, config: Dict[str, Any]):
        table_config = config.get('table', {})
        self.inscription_max_length = table_config.get('inscription_max_length', 100)
        self.column_width = table_config.get('column_width', 28)

    def format_inscriptions(self, inscriptions: Optional[str]) -> str:
        """Inscriptions keep up to inscription_max_length characters, then an ellipsis."""
        if not inscriptions:
            return EMPTY_CELL
        if len(inscriptions) > self.inscription_max_length:
            return inscriptions[:self.inscription_max_length] + "…"
        return inscriptions

    def format_cell(self, artwork: Artwork, field_name: str) -> str:
        value = getattr(artwork, field_name)
        if field_name == 'inscriptions':
            text = self.format_inscriptions(value)
        elif value is None or value == "":
            text = EMPTY_CELL
        else:
            text = str(value)
        # Keep each row on one line
        return " ".join(text.split())

    def format_row(self, number: int, artwork: Artwork, selected: bool) -> str:
        marker = "[x]" if selected else "[ ]"
        cells = [
            truncate_text(self.format_cell(artwork, name), self.column_width).ljust(self.column_width)
            for name, _ in COLUMNS
        ]
        return f"{marker} {number:3d}. " + " | ".join(cells).rstrip()

    def format_header(self) -> str:
        cells = [label.ljust(self.column_width) for _, label in COLUMNS]
        return "         " + " | ".join(cells).rstrip()

    def page_report(self, page: ArtworkPage) -> str:
        return f"{page.first_index} to {page.last_index} of {page.total_count} entries"

    def render(self, page: ArtworkPage, selected_ids: Set[Hashable], selected_count: int) -> List[str]:
        """Build the lines for one page; the caller decides where they go."""
        lines = [f"Selected Rows: {selected_count}", self.format_header()]
        lines.append("-" * len(lines[-1]))

        if not page.items:
            lines.append("No artworks on this page.")
        for number, artwork in enumerate(page.items, 1):
            lines.append(self.format_row(number, artwork, artwork.id in selected_ids))

        lines.append("")
        lines.append(f"{self.page_report(page)}   (page {page.page_index + 1} of {max(page.total_pages, 1)})")
        return lines

    def display(self, page: ArtworkPage, selected_ids: Set[Hashable], selected_count: int):
        for line in self.render(page, selected_ids, selected_count):
            click.echo(line)
