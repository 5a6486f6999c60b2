from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from homestock.schemas import Article, Assignment


@dataclass(frozen=True)
class MonthlyStats:
    month: str
    added: int = 0
    consumed: int = 0


@dataclass(frozen=True)
class StockLevel:
    article: Article
    amount: int

    @property
    def missing(self) -> int:
        return max(0, self.article.minimum_amount - self.amount)


def available_years(assignments: Iterable[Assignment]) -> List[str]:
    years = set()
    for assignment in assignments:
        for value in (assignment.added_date, assignment.consumed_date):
            if value and len(value) >= 4:
                years.add(value[:4])
    return sorted(years, reverse=True)


def _filter(assignments, location_id, article_id):
    for assignment in assignments:
        if assignment.is_deleted:
            continue
        if location_id is not None and assignment.location_id != location_id:
            continue
        if article_id is not None and assignment.article_id != article_id:
            continue
        yield assignment


def monthly_statistics(
    assignments: Iterable[Assignment],
    *,
    year: Optional[str] = None,
    location_id: Optional[int] = None,
    article_id: Optional[int] = None,
) -> List[MonthlyStats]:
    """Amounts added and consumed per period.

    Without ``year`` the buckets are whole years; with it, the twelve months
    of that year are always present (zero-filled).
    """
    buckets: Dict[str, Dict[str, int]] = {}
    if year is not None:
        for month in range(1, 13):
            buckets[f"{int(year):04d}-{month:02d}"] = {"added": 0, "consumed": 0}

    def bucket_for(value):
        if not value:
            return None
        if year is None:
            return value[:4]
        if not value.startswith(str(year)):
            return None
        return value[:7]

    for assignment in _filter(assignments, location_id, article_id):
        for field, value in (("added", assignment.added_date), ("consumed", assignment.consumed_date)):
            key = bucket_for(value)
            if key is None:
                continue
            counts = buckets.setdefault(key, {"added": 0, "consumed": 0})
            counts[field] += assignment.amount

    return [MonthlyStats(month=key, **counts) for key, counts in sorted(buckets.items())]


def stock_levels(articles: Iterable[Article], assignments: Iterable[Assignment]) -> List[StockLevel]:
    totals: Dict[int, int] = {}
    for assignment in assignments:
        if assignment.is_deleted or assignment.is_consumed:
            continue
        totals[assignment.article_id] = totals.get(assignment.article_id, 0) + assignment.amount
    return [
        StockLevel(article=article, amount=totals.get(article.id, 0))
        for article in articles
        if not article.is_deleted
    ]


def low_stock_articles(articles: Iterable[Article], assignments: Iterable[Assignment]) -> List[StockLevel]:
    return [level for level in stock_levels(articles, assignments) if level.missing > 0]


__all__ = [
    "MonthlyStats",
    "StockLevel",
    "available_years",
    "low_stock_articles",
    "monthly_statistics",
    "stock_levels",
]
