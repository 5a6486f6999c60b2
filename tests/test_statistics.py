import unittest

from homestock.schemas import Article, Assignment
from homestock.services.statistics import (
    MonthlyStats,
    available_years,
    low_stock_articles,
    monthly_statistics,
    stock_levels,
)


def _assignments():
    return [
        Assignment(id=1, article_id=1, location_id=10, amount=2, added_date="2023-11-02"),
        Assignment(
            id=2,
            article_id=1,
            location_id=10,
            amount=3,
            added_date="2024-01-10",
            consumed_date="2024-02-01",
        ),
        Assignment(id=3, article_id=2, location_id=20, amount=4, added_date="2024-01-15"),
        Assignment(id=4, article_id=2, location_id=20, amount=9, added_date="2024-03-01", deleted=True),
    ]


class StatisticsTest(unittest.TestCase):
    def test_available_years_descending(self):
        self.assertEqual(available_years(_assignments()), ["2024", "2023"])

    def test_yearly_buckets_without_filter(self):
        stats = monthly_statistics(_assignments())
        self.assertEqual(
            stats,
            [MonthlyStats("2023", added=2), MonthlyStats("2024", added=7, consumed=3)],
        )

    def test_year_filter_lists_every_month(self):
        stats = monthly_statistics(_assignments(), year="2024")
        self.assertEqual(len(stats), 12)
        self.assertEqual(stats[0], MonthlyStats("2024-01", added=7))
        self.assertEqual(stats[1], MonthlyStats("2024-02", consumed=3))
        self.assertEqual(stats[2], MonthlyStats("2024-03"))

    def test_location_filter(self):
        stats = monthly_statistics(_assignments(), location_id=20)
        self.assertEqual(stats, [MonthlyStats("2024", added=4)])

    def test_low_stock_ignores_consumed_and_deleted(self):
        articles = [
            Article(id=1, name="Milk", minimum_amount=3),
            Article(id=2, name="Rice", minimum_amount=4),
            Article(id=3, name="Salt", minimum_amount=1, deleted=True),
        ]
        levels = {level.article.id: level.amount for level in stock_levels(articles, _assignments())}
        self.assertEqual(levels, {1: 2, 2: 4})

        low = low_stock_articles(articles, _assignments())
        self.assertEqual([level.article.name for level in low], ["Milk"])
        self.assertEqual(low[0].missing, 1)


if __name__ == "__main__":
    unittest.main()
