#!/usr/bin/env python3
"""
Demo script for store-crud.

Stores a handful of records through the service layer and walks them
with cursor paging, against the store selected by STORE_BACKEND.
"""

import logging

from store_crud.api.dependencies import build_store
from store_crud.config import settings
from store_crud.logging_config import configure_logging
from store_crud.pagination import Direction, PageRequest
from store_crud.services import CrudService

logger = logging.getLogger("demo")


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_paging(service: CrudService) -> None:
    """Page forward and back through a bucket."""
    print_section("Cursor Paging")

    for i in range(7):
        service.save(f"fruit-{i:02d}", {"name": f"fruit #{i}", "rank": i})
    print(f"\nStored {service.total_count()} records in '{service.bucket}'")

    page = service.fetch_page(PageRequest(per_page=3))
    cursor = None
    while True:
        keys = [row.key for row in page.rows]
        print(f"  page: {keys} has_more={page.has_more}")
        if not page.has_more:
            break
        cursor = keys[-1]
        page = service.fetch_page(PageRequest(3, Direction.AFTER, cursor))

    back = service.fetch_page(PageRequest(3, Direction.BEFORE, cursor))
    print(f"  before {cursor}: {[row.key for row in back.rows]}")


def demo_merge(service: CrudService) -> None:
    """Merge a partial record into a stored one."""
    print_section("Partial Update")

    merged = service.merge("fruit-00", {"ripe": True})
    print(f"\n  merged: {merged}")


def main() -> None:
    """Run all demos."""
    configure_logging()
    print("\nStore CRUD Demo")
    print("=" * 70)
    print(f"Backend: {settings.store_backend}")

    service = CrudService.create(store=build_store(), bucket="demo-fruit")

    try:
        demo_paging(service)
        demo_merge(service)

        print("\n" + "=" * 70)
        print("Demo completed successfully!")
        print("=" * 70)

    except Exception:
        logger.exception("Demo failed")
        print("\nWith STORE_BACKEND=redis make sure Redis is running,")
        print("or set REDIS_URL to your Redis instance.")
    finally:
        for row in service.fetch_page(PageRequest(per_page=100)).rows:
            service.remove(row.key)


if __name__ == "__main__":
    main()
