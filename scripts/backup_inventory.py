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


def parse_args():
    parser = argparse.ArgumentParser(description="Back up or export the inventory document.")
    parser.add_argument(
        "--export",
        default=None,
        help="Also write the current document to this path.",
    )
    parser.add_argument(
        "--purge-deleted",
        action="store_true",
        help="Remove deleted records after the backup has been taken.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    repository = build_repository()
    try:
        repository.load()
    except CorruptDataError as exc:
        raise SystemExit(f"Inventory document is corrupt: {exc}") from exc

    backup_name = repository.backup()
    if backup_name is None:
        raise SystemExit("Backup failed.")
    print(f"Backup created: {backup_name}")

    if args.export:
        try:
            Path(args.export).write_text(repository.get_raw_json(), encoding="utf-8")
        except OSError as exc:
            raise SystemExit(f"Export failed: {exc}") from exc
        print(f"Exported to {args.export}")

    if args.purge_deleted:
        print(f"Purged {repository.purge_deleted()} deleted records.")


if __name__ == "__main__":
    main()
