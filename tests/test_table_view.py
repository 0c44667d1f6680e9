"""
Unit tests for ArtworkTableRenderer
"""
import pytest
from unittest.mock import patch

from src.models import Artwork, ArtworkPage
from src.table_view import ArtworkTableRenderer, EMPTY_CELL


class TestArtworkTableRenderer:
    """Test table formatting"""

    @pytest.fixture
    def renderer(self, sample_config):
        return ArtworkTableRenderer(sample_config)

    @pytest.fixture
    def page(self):
        return ArtworkPage(
            items=[
                Artwork(id=11, title="Water Lilies", place_of_origin="France",
                        artist_display="Claude Monet\nFrench, 1840-1926", date_start=1906, date_end=1906),
                Artwork(id=12, title=None, inscriptions="x" * 150),
            ],
            total_count=40,
            page_index=1,
            page_size=12,
        )

    def test_short_inscriptions_unchanged(self, renderer):
        assert renderer.format_inscriptions("Signed lower left") == "Signed lower left"

    def test_long_inscriptions_cut_with_ellipsis(self, renderer):
        text = "a" * 101
        assert renderer.format_inscriptions(text) == "a" * 100 + "…"

    def test_inscriptions_at_limit_kept(self, renderer):
        assert renderer.format_inscriptions("b" * 100) == "b" * 100

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_inscriptions(self, renderer, value):
        assert renderer.format_inscriptions(value) == EMPTY_CELL

    def test_format_cell_flattens_newlines(self, renderer, page):
        assert renderer.format_cell(page.items[0], 'artist_display') == "Claude Monet French, 1840-1926"

    def test_format_cell_missing_value(self, renderer, page):
        assert renderer.format_cell(page.items[1], 'title') == EMPTY_CELL
        assert renderer.format_cell(page.items[1], 'date_start') == EMPTY_CELL

    def test_format_row_marker(self, renderer, page):
        assert renderer.format_row(1, page.items[0], True).startswith("[x]   1. Water Lilies")
        assert renderer.format_row(2, page.items[1], False).startswith("[ ]   2. ")

    def test_cells_truncated_to_column_width(self, renderer, page):
        row = renderer.format_row(2, page.items[1], False)
        cells = row[9:].split(" | ")
        assert all(len(cell.rstrip()) <= renderer.column_width for cell in cells)

    def test_page_report(self, renderer, page):
        assert renderer.page_report(page) == "13 to 14 of 40 entries"

    def test_render(self, renderer, page):
        lines = renderer.render(page, {11}, 7)

        assert lines[0] == "Selected Rows: 7"
        assert "Title" in lines[1] and "Inscriptions" in lines[1]
        assert lines[3].startswith("[x]")
        assert lines[4].startswith("[ ]")
        assert lines[-1].startswith("13 to 14 of 40 entries")
        assert "page 2 of 4" in lines[-1]

    def test_render_empty_page(self, renderer):
        page = ArtworkPage(items=[], total_count=0, page_index=0, page_size=12)
        lines = renderer.render(page, set(), 0)
        assert "No artworks on this page." in lines
        assert "0 to 0 of 0 entries" in lines[-1]
        assert "page 1 of 1" in lines[-1]

    @patch('click.echo')
    def test_display_echoes_lines(self, mock_echo, renderer, page):
        renderer.display(page, set(), 0)
        assert mock_echo.call_count == len(renderer.render(page, set(), 0))
