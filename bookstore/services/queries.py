"""
Query shapes used by the catalog

Filters and pipelines are plain documents so they can be inspected without
a server.
"""

from typing import Dict, Any, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

from bookstore.core.models import PlanSummary


# ============== FILTERS ==============

def by_genre(genre: str) -> Dict[str, Any]:
    return {"genre": genre}


def by_author(author: str) -> Dict[str, Any]:
    return {"author": author}


def by_title(title: str) -> Dict[str, Any]:
    return {"title": title}


def published_after(year: int) -> Dict[str, Any]:
    return {"published_year": {"$gt": year}}


def in_stock_published_after(year: int) -> Dict[str, Any]:
    return {"in_stock": True, "published_year": {"$gt": year}}


# ============== SORTING & PAGINATION ==============

PRICE_ASC = [("price", ASCENDING)]
PRICE_DESC = [("price", DESCENDING)]
TITLE_ASC = [("title", ASCENDING)]


def page_bounds(page: int, page_size: int) -> Tuple[int, int]:
    """(skip, limit) for a 1-based page number"""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return (page - 1) * page_size, page_size


# ============== AGGREGATION PIPELINES ==============

def avg_price_by_genre_pipeline() -> List[Dict[str, Any]]:
    return [
        {"$group": {"_id": "$genre", "avgPrice": {"$avg": "$price"}, "count": {"$sum": 1}}},
        {"$sort": {"avgPrice": DESCENDING}},
    ]


def top_author_pipeline() -> List[Dict[str, Any]]:
    """Author with the most books; ties go to the alphabetically first author"""
    return [
        {"$group": {"_id": "$author", "count": {"$sum": 1}}},
        {"$sort": {"count": DESCENDING, "_id": ASCENDING}},
        {"$limit": 1},
    ]


def books_by_decade_pipeline() -> List[Dict[str, Any]]:
    return [
        {"$project": {"decade": {"$multiply": [{"$floor": {"$divide": ["$published_year", 10]}}, 10]}}},
        {"$group": {"_id": "$decade", "count": {"$sum": 1}}},
        {"$sort": {"_id": ASCENDING}},
    ]


# ============== EXPLAIN ==============

def _find_index_name(stage: Optional[Dict[str, Any]]) -> Optional[str]:
    """Depth-first search of a winning-plan stage tree for the first IXSCAN index"""
    while stage:
        if stage.get("indexName"):
            return stage["indexName"]
        for child in stage.get("inputStages", []) or []:
            name = _find_index_name(child)
            if name:
                return name
        stage = stage.get("inputStage")
    return None


def summarize_explain(plan: Dict[str, Any]) -> PlanSummary:
    """Pull timing, document counts and the index used out of an explain result"""
    stats = plan.get("executionStats") or {}
    index_name = _find_index_name(stats.get("executionStages"))
    if index_name is None:
        planner = plan.get("queryPlanner") or {}
        winning = planner.get("winningPlan") or {}
        # Newer servers nest the classic plan under queryPlan
        index_name = _find_index_name(winning.get("queryPlan", winning))
    return PlanSummary(
        execution_time_ms=stats.get("executionTimeMillis"),
        docs_examined=stats.get("totalDocsExamined"),
        docs_returned=stats.get("nReturned", stats.get("totalDocsReturned")),
        index_name=index_name,
    )
