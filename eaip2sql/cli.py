#!/usr/bin/env python3

import os
import sys
import argparse
import logging
from typing import List, Optional

from .errors import AlreadyPopulatedError, Eaip2SqlError
from .pipeline import EntityNormalizer, Orchestrator
from .sources.registry import DEFAULT_REGISTRY, SourceRegistry
from .storage import DatabaseStorage, ScriptStorage
from .utils.airac_date_calculator import AiracCycle

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URI = 'sqlite:///navdata.db'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='eaip2sql',
        description='Generate navigation data for one AIRAC cycle from published eAIPs'
    )

    # Output configuration
    parser.add_argument('-d', '--database-uri',
                        help='SQLAlchemy connection URL for the database. MySQL and SQLite supported '
                             f'(default: $EAIP2SQL_DATABASE_URI or {DEFAULT_DATABASE_URI})',
                        default=os.environ.get('EAIP2SQL_DATABASE_URI', DEFAULT_DATABASE_URI))
    parser.add_argument('-s', '--script', help='Write a SQL script to this file instead of using a database')
    parser.add_argument('--script-dialect', help='SQL dialect of the script',
                        choices=['sqlite', 'mysql', 'postgresql'], default='sqlite')

    # Cycle and source selection
    parser.add_argument('-n', '--next-cycle', help='Build data for the next AIRAC cycle, instead of the current one',
                        action='store_true')
    parser.add_argument('-x', '--exclude-ais', help='AIS sources to exclude by two letter country code',
                        action='append', default=[], metavar='COUNTRY')
    parser.add_argument('-l', '--list-ais', help='List all available AIS sources', action='store_true')

    # General options
    parser.add_argument('-c', '--cache-dir', help='Directory to cache downloaded pages')
    parser.add_argument('--force-refresh', help='Force refresh of cached data', action='store_true')
    parser.add_argument('--never-refresh', help='Never refresh cached data if it exists', action='store_true')
    parser.add_argument('--strict-references',
                        help='Fail when an airway waypoint references an unknown navaid or intersection',
                        action='store_true')
    parser.add_argument('-v', '--verbose', help='Verbose output', action='store_true')
    return parser


def list_sources(registry: SourceRegistry) -> None:
    print("Available AISs:")
    for source in registry.list():
        print(f"  {source.country}: {source.name}")


def main(argv: Optional[List[str]] = None, registry: SourceRegistry = DEFAULT_REGISTRY) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.list_ais:
        list_sources(registry)
        return 0

    if args.force_refresh and args.never_refresh:
        logger.error("--force-refresh and --never-refresh are mutually exclusive")
        return 1

    cycle = AiracCycle.current()
    if args.next_cycle:
        cycle = cycle.next()

    sources = registry.filter(args.exclude_ais)
    if not sources:
        logger.error("All sources are excluded, nothing to generate")
        return 1

    def configure_provider(provider):
        if args.force_refresh and hasattr(provider, 'set_force_refresh'):
            provider.set_force_refresh()
        if args.never_refresh and hasattr(provider, 'set_never_refresh'):
            provider.set_never_refresh()

    try:
        if args.script:
            storage = ScriptStorage(args.script, dialect=args.script_dialect)
        else:
            storage = DatabaseStorage(args.database_uri)
        with storage:
            Orchestrator(
                sources,
                cycle,
                storage,
                normalizer=EntityNormalizer(strict_references=args.strict_references),
                cache_dir=args.cache_dir,
                configure_provider=configure_provider,
            ).run()
    except AlreadyPopulatedError as e:
        logger.error(f"Target already holds generated data, refusing to generate again: {e}")
        return 1
    except Eaip2SqlError as e:
        logger.error(f"Failed to process eAIP data: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
