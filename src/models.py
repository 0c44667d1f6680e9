from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class Artwork:
    """One record of the artworks collection."""
    id: int
    title: Optional[str] = None
    place_of_origin: Optional[str] = None
    artist_display: Optional[str] = None
    inscriptions: Optional[str] = None
    date_start: Optional[int] = None
    date_end: Optional[int] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Artwork':
        if data.get('id') is None:
            raise ValueError(f"Artwork record without id: {data}")
        return cls(
            id=data['id'],
            title=data.get('title'),
            place_of_origin=data.get('place_of_origin'),
            artist_display=data.get('artist_display'),
            inscriptions=data.get('inscriptions'),
            date_start=data.get('date_start'),
            date_end=data.get('date_end'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ArtworkPage:
    """A single page of artworks plus the size of the whole collection."""
    items: List[Artwork] = field(default_factory=list)
    total_count: int = 0
    page_index: int = 0       # zero-based
    page_size: int = 12

    @classmethod
    def from_api(cls, payload: Dict[str, Any], page_index: int, page_size: int) -> 'ArtworkPage':
        """Build a page from an API response body ({"pagination": {...}, "data": [...]})."""
        pagination = payload.get('pagination') or {}
        total = pagination.get('total')
        if total is None:
            raise ValueError("Response has no pagination total")
        items = [Artwork.from_api(record) for record in payload.get('data') or []]
        return cls(items=items, total_count=int(total), page_index=page_index, page_size=page_size)

    def entries(self) -> List[Tuple[int, Artwork]]:
        return [(artwork.id, artwork) for artwork in self.items]

    @property
    def first_index(self) -> int:
        """1-based position of the first row, 0 for an empty page."""
        if not self.items:
            return 0
        return self.page_index * self.page_size + 1

    @property
    def last_index(self) -> int:
        if not self.items:
            return 0
        return self.page_index * self.page_size + len(self.items)

    @property
    def total_pages(self) -> int:
        return -(-self.total_count // self.page_size) if self.page_size > 0 else 0

    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0
