import logging
from typing import Any, Dict, Iterable, List

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

try:
    from .models import Artwork, ArtworkPage
    from .exceptions import ArtworksAPIError
except ImportError:
    from models import Artwork, ArtworkPage
    from exceptions import ArtworksAPIError


class ArtworksClient:
    """Fetch pages of artworks from the Art Institute of Chicago API."""

    # The API rejects larger limits
    MAX_PAGE_SIZE = 100

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.logger = logging.getLogger(__name__)
        api_config = config['api']
        self.base_url = api_config['base_url'].rstrip('/')
        self.endpoint = api_config.get('endpoint', 'artworks').strip('/')
        self.timeout = api_config.get('timeout', 30)
        self.fields = list(api_config.get('fields') or [])

        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': config['http']['user_agent'],
            'Accept': 'application/json',
        })

        # Configure retries
        retry_strategy = Retry(
            total=config['http']['max_retries'],
            backoff_factor=config['http']['retry_delay'],
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=['GET'],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.endpoint}"

    def fetch_page(self, page_index: int, page_size: int) -> ArtworkPage:
        """
        Fetch one page of the collection.

        Args:
            page_index: Zero-based page number
            page_size: Rows per page (1..MAX_PAGE_SIZE)

        Returns:
            ArtworkPage with the page's items and the collection total
        """
        if page_index < 0:
            raise ValueError(f"Page index cannot be negative: {page_index}")
        if not 1 <= page_size <= self.MAX_PAGE_SIZE:
            raise ValueError(f"Page size must be between 1 and {self.MAX_PAGE_SIZE}, got {page_size}")

        params = {'page': page_index + 1, 'limit': page_size}
        if self.fields:
            params['fields'] = ','.join(self.fields)

        payload = self._get_json(params)
        try:
            page = ArtworkPage.from_api(payload, page_index, page_size)
        except (ValueError, TypeError, AttributeError) as e:
            self.logger.error(f"Malformed page {page_index + 1} response: {e}")
            raise ArtworksAPIError(f"Malformed response for page {page_index + 1}: {e}") from e

        self.logger.debug(f"Fetched page {page_index + 1}: {len(page.items)} items of {page.total_count}")
        return page

    def fetch_by_ids(self, ids: Iterable[int]) -> List[Artwork]:
        """Fetch specific artworks by id; unknown ids are silently absent from the result."""
        ids = list(ids)
        if not ids:
            return []

        params = {'ids': ','.join(str(i) for i in ids), 'limit': len(ids)}
        if self.fields:
            params['fields'] = ','.join(self.fields)

        payload = self._get_json(params)
        try:
            return [Artwork.from_api(record) for record in payload.get('data') or []]
        except (ValueError, TypeError, AttributeError) as e:
            self.logger.error(f"Malformed response for ids {ids[:5]}...: {e}")
            raise ArtworksAPIError(f"Malformed response for ids lookup: {e}") from e

    def _get_json(self, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            self.logger.debug(f"Fetching: {self.url} {params}")
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Failed to fetch {self.url}: {e}")
            raise ArtworksAPIError(f"Failed to fetch artworks: {e}") from e
        except ValueError as e:
            self.logger.error(f"Invalid JSON from {self.url}: {e}")
            raise ArtworksAPIError(f"Invalid JSON response: {e}") from e

        if not isinstance(payload, dict):
            raise ArtworksAPIError(f"Unexpected response type: {type(payload).__name__}")
        return payload

    def close(self):
        """Clean up resources."""
        self.session.close()
