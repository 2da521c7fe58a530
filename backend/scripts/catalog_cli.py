"""Manage the library catalog from the command line.

Usage:
    python -m scripts.catalog_cli add book "Dune" "Frank Herbert" 412
    python -m scripts.catalog_cli update B100001 --title "Dune Messiah"
    python -m scripts.catalog_cli remove B100001
    python -m scripts.catalog_cli list [--category disc]
    python -m scripts.catalog_cli show B100001

Run from the backend/ directory. The database comes from CATALOG_DATABASE_URL
(see settings.py); every command is persisted as soon as it succeeds.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from db import init_db
from domain.errors import CatalogError
from domain.models import LibraryItem
from repositories import CountersRepository, ItemsRepository
from services.catalog import Catalog
from services.id_allocator import IdAllocator
from services.items import apply_changes, create_item, filter_by_category
from settings import settings

logger = logging.getLogger("catalog_cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the library catalog.")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Add a new item; its ID is assigned automatically.")
    add.add_argument("category", help="book, disc, periodical or interactive-media")
    add.add_argument("title")
    add.add_argument("creator", help="Author, director, editor or publisher.")
    add.add_argument("detail", help="Pages, runtime minutes, issue number or platform.")

    update = sub.add_parser("update", help="Change fields of an existing item.")
    update.add_argument("item_id")
    update.add_argument("--title")
    update.add_argument("--creator")
    update.add_argument("--detail")

    remove = sub.add_parser("remove", help="Delete an item.")
    remove.add_argument("item_id")

    listing = sub.add_parser("list", help="List items ordered by ID.")
    listing.add_argument("--category", default=None)

    show = sub.add_parser("show", help="Show one item.")
    show.add_argument("item_id")
    return parser


def _format_row(item: LibraryItem) -> str:
    return "\t".join(
        [item.item_id, item.category.value, item.title, item.creator, str(item.detail_value)]
    )


def run(args: argparse.Namespace, catalog: Catalog, allocator: IdAllocator, out: TextIO) -> int:
    """Execute one parsed command. Returns the process exit code."""
    try:
        if args.command == "add":
            item = create_item(allocator, args.category, args.title, args.creator, args.detail)
            catalog.add(item)
            print(item.item_id, file=out)
        elif args.command == "update":
            item = catalog.get_by_id(args.item_id)
            if item is None:
                print(f"No item with ID {args.item_id}", file=out)
                return 1
            edited = apply_changes(item, title=args.title, creator=args.creator, detail=args.detail)
            if edited == item:
                print("No changes made.", file=out)
                return 0
            catalog.update(edited)
            print(_format_row(edited), file=out)
        elif args.command == "remove":
            if not catalog.remove(args.item_id):
                print(f"No item with ID {args.item_id}", file=out)
                return 1
            print(f"Removed {args.item_id}", file=out)
        elif args.command == "list":
            items = catalog.list_items()
            if args.category:
                items = filter_by_category(items, args.category)
            if not items:
                print("There are no items in your catalog.", file=out)
            for item in items:
                print(_format_row(item), file=out)
        elif args.command == "show":
            item = catalog.get_by_id(args.item_id)
            if item is None:
                print(f"No item with ID {args.item_id}", file=out)
                return 1
            print(str(item), file=out)
    except CatalogError as exc:
        print(f"Error: {exc}", file=out)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    if not logger.handlers:
        logging.basicConfig(level=settings.LOG_LEVEL, format="%(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    init_db()
    allocator = IdAllocator(CountersRepository())
    catalog = Catalog.load(ItemsRepository())
    return run(args, catalog, allocator, sys.stdout)


if __name__ == "__main__":
    raise SystemExit(main())
