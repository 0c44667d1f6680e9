"""
Test configuration and shared fixtures for artpick tests
"""
import sys
import pytest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock
import requests

# Tests import modules as src.<module>
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.models import Artwork, ArtworkPage
from src.utils import get_default_config


class FakeArtworksClient:
    """In-memory page source over a fixed, stably ordered collection."""

    MAX_PAGE_SIZE = 100

    def __init__(self, total: int):
        self.artworks = [
            Artwork(id=1000 + i, title=f"Artwork {i}", artist_display=f"Artist {i}", date_start=1800 + i)
            for i in range(total)
        ]
        self.page_requests = []
        self.id_requests = []
        self.fail = False

    def fetch_page(self, page_index, page_size):
        from src.exceptions import ArtworksAPIError
        if self.fail:
            raise ArtworksAPIError("network down")
        self.page_requests.append((page_index, page_size))
        start = page_index * page_size
        return ArtworkPage(items=self.artworks[start:start + page_size], total_count=len(self.artworks),
                           page_index=page_index, page_size=page_size)

    def fetch_by_ids(self, ids):
        ids = list(ids)
        self.id_requests.append(ids)
        wanted = set(ids)
        return [artwork for artwork in self.artworks if artwork.id in wanted]

    def close(self):
        pass


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)

@pytest.fixture
def sample_config(temp_dir):
    """Default configuration for tests, logging to console only"""
    config = get_default_config()
    config['logging']['log_to_file'] = False
    config['directories']['output_dir'] = str(temp_dir / 'output')
    config['directories']['logs_dir'] = str(temp_dir / 'logs')
    return config

@pytest.fixture
def fake_client():
    """Page source over 20 artworks (ids 1000..1019)"""
    return FakeArtworksClient(20)

@pytest.fixture
def api_payload():
    """Build an artworks API response body"""
    def build(ids, total):
        return {
            'pagination': {'total': total, 'limit': len(ids), 'offset': 0, 'current_page': 1},
            'data': [
                {
                    'id': i,
                    'title': f"Title {i}",
                    'place_of_origin': 'France',
                    'artist_display': f"Artist {i}",
                    'inscriptions': None,
                    'date_start': 1900,
                    'date_end': 1901,
                }
                for i in ids
            ],
        }
    return build

@pytest.fixture
def mock_response(api_payload):
    """Create a mock HTTP response"""
    response = Mock(spec=requests.Response)
    response.status_code = 200
    response.headers = {'content-type': 'application/json'}
    response.json.return_value = api_payload([1, 2, 3], 120)
    response.raise_for_status = Mock()
    return response
