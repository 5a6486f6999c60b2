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
from homestock.services.repository import parse_inventory


def parse_args():
    parser = argparse.ArgumentParser(
        description="Validate an inventory JSON document and replace the current inventory with it."
    )
    parser.add_argument("--path", required=True, help="Path to the inventory .json document.")
    parser.add_argument("--dry-run", action="store_true", help="Validate without importing.")
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    try:
        content = Path(args.path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"Import failed: {exc}") from exc

    try:
        if args.dry_run:
            data = parse_inventory(content)
            backup_name = None
        else:
            repository = build_repository()
            repository.load()
            backup_name = repository.import_data(content)
            data = repository.snapshot(include_deleted=True)
    except (OSError, CorruptDataError) as exc:
        raise SystemExit(f"Import failed: {exc}") from exc

    counts = data.counts()
    print(
        f"{counts['articles']} articles, {counts['locations']} locations, "
        f"{counts['assignments']} assignments"
    )
    if args.dry_run:
        print("Dry run complete, inventory unchanged.")
    else:
        if backup_name:
            print(f"Previous inventory saved as {backup_name}")
        print("Import complete.")


if __name__ == "__main__":
    main()
