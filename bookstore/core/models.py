"""
Data models
"""

import math
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


@dataclass
class Book:
    """A single book record in the collection"""

    title: str
    author: str
    genre: str
    published_year: int
    price: float
    in_stock: bool
    pages: Optional[int] = None
    publisher: Optional[str] = None

    @property
    def decade(self) -> int:
        return decade_of(self.published_year)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for insertion"""
        return {
            "title": self.title,
            "author": self.author,
            "genre": self.genre,
            "published_year": self.published_year,
            "price": self.price,
            "in_stock": self.in_stock,
            "pages": self.pages,
            "publisher": self.publisher,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Book':
        """Create from a stored document; `_id` and unknown keys are ignored"""
        return cls(
            title=data["title"],
            author=data["author"],
            genre=data["genre"],
            published_year=int(data["published_year"]),
            price=float(data["price"]),
            in_stock=bool(data["in_stock"]),
            pages=data.get("pages"),
            publisher=data.get("publisher"),
        )


def decade_of(year: int) -> int:
    """floor(year / 10) * 10, matching the server-side $floor/$divide pipeline"""
    return int(math.floor(year / 10)) * 10


@dataclass
class SeedReport:
    """Outcome of one seeding run"""

    existing_count: int = 0
    dropped: bool = False
    inserted_count: int = 0
    summary: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class StepFailure:
    """A catalog step that raised"""

    name: str
    error: str


@dataclass
class CatalogReport:
    """Outcome of one pass over the query catalog"""

    completed: List[str] = field(default_factory=list)
    failed: List[StepFailure] = field(default_factory=list)
    results: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class PlanSummary:
    """The parts of an executionStats explain document that get reported"""

    execution_time_ms: Optional[int] = None
    docs_examined: Optional[int] = None
    docs_returned: Optional[int] = None
    index_name: Optional[str] = None
