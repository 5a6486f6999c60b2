import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from homestock.core.errors import CorruptDataError
from homestock.core.logging import setup_logging
from homestock.dependencies import build_repository
from homestock.services.statistics import available_years, low_stock_articles, monthly_statistics


def parse_args():
    parser = argparse.ArgumentParser(description="Print added/consumed statistics and low stock.")
    parser.add_argument("--year", default=None, help="Break the year down by month (YYYY).")
    parser.add_argument("--location-id", type=int, default=None)
    parser.add_argument("--article-id", type=int, default=None)
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    repository = build_repository()
    try:
        repository.load()
    except CorruptDataError as exc:
        raise SystemExit(f"Inventory document is corrupt: {exc}") from exc

    assignments = repository.assignments()
    years = available_years(assignments)
    print("Years: " + (", ".join(years) if years else "--"))

    for stats in monthly_statistics(
        assignments,
        year=args.year,
        location_id=args.location_id,
        article_id=args.article_id,
    ):
        print(f"  {stats.month}: +{stats.added} / -{stats.consumed}")

    low_stock = low_stock_articles(repository.articles(), assignments)
    if low_stock:
        print("Below minimum amount:")
        for level in low_stock:
            print(f"  {level.article.name}: {level.amount} of {level.article.minimum_amount}")


if __name__ == "__main__":
    main()
