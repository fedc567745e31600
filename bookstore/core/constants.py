"""
Constants and enums used by the seeder and the query catalog
"""

from enum import Enum
from typing import Dict, List, Tuple

from pymongo import ASCENDING, DESCENDING


class Section(Enum):
    """Catalog sections, printed as headers"""
    CRUD = "TASK 2: BASIC CRUD OPERATIONS"
    ADVANCED = "TASK 3: ADVANCED QUERIES"
    AGGREGATION = "TASK 4: AGGREGATION PIPELINES"
    INDEXING = "TASK 5: INDEXING"


# Demonstration parameters
FICTION_GENRE = "Fiction"
MODERN_YEAR = 1950
RECENT_YEAR = 2010
FEATURED_AUTHOR = "George Orwell"
REPRICED_TITLE = "The Alchemist"
NEW_PRICE = 11.99
REMOVED_TITLE = "Moby Dick"
EXPLAINED_TITLE = "To Kill a Mockingbird"
PROJECTION_PREVIEW = 5
PAGES_SHOWN = (1, 2)

# Projections
SUMMARY_PROJECTION: Dict[str, int] = {"title": 1, "author": 1, "published_year": 1, "_id": 0}
PRICE_PROJECTION: Dict[str, int] = {"title": 1, "author": 1, "price": 1, "_id": 0}

# Index specs
TITLE_INDEX: List[Tuple[str, int]] = [("title", ASCENDING)]
AUTHOR_YEAR_INDEX: List[Tuple[str, int]] = [("author", ASCENDING), ("published_year", DESCENDING)]

EXPLAIN_VERBOSITY = "executionStats"

# Console
RULE = "=" * 60
