"""Slug backfill job.

Assigns a unique slug to every content parent stored without one. Run it
after bulk imports or once a new family has been added:

    site-content-generate-slugs              # every family
    site-content-generate-slugs --family faq --dry-run

The database is taken from ``DATABASE_URL``.
"""

import argparse
from typing import Dict, List, Optional

from sqlalchemy.orm import sessionmaker

from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.persistence import session_scope
from modules.content.families import FAMILIES, get_family
from modules.content.service import build_lifecycle_service

logger = get_module_logger()


def generate_missing_slugs(
    family: Optional[str] = None,
    dry_run: bool = False,
    session_factory: Optional[sessionmaker] = None,
) -> Dict[str, int]:
    """
    Assign slugs to every parent that has none.

    Args:
        family: Restrict the run to one family. All families by default.
        dry_run: Only count the parents that would receive a slug.
        session_factory: Session factory override (tests).

    Returns:
        Count per family name.
    """
    configs = [get_family(family)] if family else list(FAMILIES.values())
    counts: Dict[str, int] = {}

    with bind_request_context(operation="generate_missing_slugs", dry_run=dry_run):
        for config in configs:
            with session_scope(session_factory) as session:
                lifecycle = build_lifecycle_service(session, config)
                if dry_run:
                    counts[config.name] = lifecycle.slugs.count_missing_slugs(config)
                else:
                    counts[config.name] = lifecycle.slugs.generate_missing_slugs(
                        config, lifecycle.languages.fallback_code
                    )
            logger.info(
                "slug_backfill_family_done",
                family=config.name,
                count=counts[config.name],
                dry_run=dry_run,
            )

    logger.info("slug_backfill_done", total=sum(counts.values()), dry_run=dry_run)
    return counts


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Assign slugs to content stored without one"
    )
    parser.add_argument(
        "--family",
        choices=sorted(FAMILIES),
        help="Only backfill this family",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Count the parents missing a slug without changing them",
    )
    args = parser.parse_args(argv)

    counts = generate_missing_slugs(family=args.family, dry_run=args.dry_run)
    verb = "would receive" if args.dry_run else "received"
    for name, count in counts.items():
        print(f"{name}: {count} {verb} a slug")


if __name__ == "__main__":
    main()
