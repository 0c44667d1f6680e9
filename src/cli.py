import click
import os
import sys
from typing import Optional, Dict, Any

try:
    from .artworks_api import ArtworksClient
    from .browser import ArtworkBrowser
    from .exporter import SelectionExporter
    from .page_selection import PageSelectionAdapter
    from .selection import SelectionTracker, parse_prefix_input
    from .table_view import ArtworkTableRenderer
    from .exceptions import InvalidPrefixInput
    from .utils import load_config, setup_logging, ensure_directories
except ImportError:
    from artworks_api import ArtworksClient
    from browser import ArtworkBrowser
    from exporter import SelectionExporter
    from page_selection import PageSelectionAdapter
    from selection import SelectionTracker, parse_prefix_input
    from table_view import ArtworkTableRenderer
    from exceptions import InvalidPrefixInput
    from utils import load_config, setup_logging, ensure_directories


__version__ = "1.0.0"


def _prepare(config: Optional[str], verbose: bool, page_size: Optional[int] = None) -> Dict[str, Any]:
    """Load configuration, apply CLI overrides, create directories and set up logging."""
    config_path = config or 'config.yaml'
    app_config = load_config(config_path)

    if page_size:
        app_config['table']['page_size'] = page_size
    if verbose:
        app_config['logging']['level'] = 'DEBUG'

    ensure_directories(app_config)
    setup_logging(app_config['logging'], logs_dir=app_config['directories']['logs_dir'])
    return app_config


def _initial_prefix(select_first: Optional[str]) -> Optional[int]:
    if select_first is None:
        return None
    try:
        return parse_prefix_input(select_first)
    except InvalidPrefixInput as e:
        raise click.BadParameter(str(e), param_hint="'--select-first'")


def _fail(e: Exception, verbose: bool):
    click.echo(f"❌ Error: {str(e)}")
    if verbose:
        import traceback
        traceback.print_exc()
    sys.exit(1)


common_options = [
    click.option('--config', '-c',
                 type=click.Path(exists=True),
                 help='Configuration file path'),
    click.option('--verbose', '-v',
                 is_flag=True,
                 help='Enable verbose logging'),
]


def with_common_options(func):
    for option in reversed(common_options):
        func = option(func)
    return func


@click.command()
@click.option('--page-size', '-s',
              type=click.IntRange(1, ArtworksClient.MAX_PAGE_SIZE),
              help='Rows per page')
@click.option('--start-page', '-p',
              type=click.IntRange(min=1),
              default=1,
              help='Page to open first')
@click.option('--select-first', '-n',
              help='Start with the first N rows selected')
@with_common_options
def browse(page_size: Optional[int],
           start_page: int,
           select_first: Optional[str],
           config: Optional[str],
           verbose: bool):
    """
    Page through artworks interactively and build a selection.
    """
    prefix = _initial_prefix(select_first)
    try:
        app_config = _prepare(config, verbose, page_size)
        client = ArtworksClient(app_config)
        try:
            browser = ArtworkBrowser(client, app_config)
            if prefix:
                browser.tracker.set_prefix(prefix)
            tracker = browser.run(start_page)
        finally:
            client.close()

        click.echo(f"✅ Session ended with {tracker.selected_count()} rows selected")

    except KeyboardInterrupt:
        click.echo("\n⚠️  Browsing interrupted by user")
        sys.exit(1)
    except Exception as e:
        _fail(e, verbose)


@click.command()
@click.argument('page', type=click.IntRange(min=1))
@click.option('--page-size', '-s',
              type=click.IntRange(1, ArtworksClient.MAX_PAGE_SIZE),
              help='Rows per page')
@click.option('--select-first', '-n',
              help='Mark the first N rows of the collection as selected')
@with_common_options
def show(page: int,
         page_size: Optional[int],
         select_first: Optional[str],
         config: Optional[str],
         verbose: bool):
    """
    Print one page of artworks.

    PAGE: 1-based page number
    """
    prefix = _initial_prefix(select_first)
    try:
        app_config = _prepare(config, verbose, page_size)
        size = app_config['table']['page_size']
        client = ArtworksClient(app_config)
        try:
            artwork_page = client.fetch_page(page - 1, size)
        finally:
            client.close()

        tracker = SelectionTracker(total_count=artwork_page.total_count)
        if prefix:
            tracker.set_prefix(prefix)
        adapter = PageSelectionAdapter(tracker)
        selected_ids = adapter.selected_ids_on_page(artwork_page.entries(), artwork_page.page_index, size)

        ArtworkTableRenderer(app_config).display(artwork_page, selected_ids, tracker.selected_count())

    except KeyboardInterrupt:
        click.echo("\n⚠️  Interrupted by user")
        sys.exit(1)
    except Exception as e:
        _fail(e, verbose)


@click.command()
@click.option('--select-first', '-n',
              required=True,
              help='Export the first N rows of the collection')
@click.option('--output', '-o',
              type=click.Path(),
              help='Output file (JSON Lines)')
@with_common_options
def export(select_first: str,
           output: Optional[str],
           config: Optional[str],
           verbose: bool):
    """
    Export the first N artworks to a JSON Lines file.
    """
    prefix = _initial_prefix(select_first)
    try:
        app_config = _prepare(config, verbose)
        output_path = output or os.path.join(app_config['directories']['output_dir'],
                                             app_config['export']['output_filename'])
        client = ArtworksClient(app_config)
        try:
            # The first page fetch reports the total that bounds the prefix
            first_page = client.fetch_page(0, 1)
            tracker = SelectionTracker(total_count=first_page.total_count)
            tracker.set_prefix(prefix)
            written = SelectionExporter(client, app_config).export(tracker, output_path)
        finally:
            client.close()

        click.echo(f"🎉 Exported {written} artworks to: {output_path}")

    except KeyboardInterrupt:
        click.echo("\n⚠️  Export interrupted by user")
        sys.exit(1)
    except Exception as e:
        _fail(e, verbose)


@click.group()
@click.version_option(version=__version__, prog_name="artpick")
def main():
    """artpick - Browse the artworks collection page by page and select rows, including the first N of everything."""
    pass


main.add_command(browse)
main.add_command(show)
main.add_command(export)


if __name__ == '__main__':
    main()
