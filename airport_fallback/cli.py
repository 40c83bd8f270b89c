#!/usr/bin/env python3

import sys
import argparse
import json
import logging
from pathlib import Path

from airport_fallback import config
from airport_fallback.builder import FallbackTableBuilder
from airport_fallback.errors import GenerationError
from airport_fallback.service import AirportFallbackService
from airport_fallback.sources.ourairports import OurAirportsSource
from airport_fallback.summary import coverage_breakdown, log_summary, summarize_table

logger = logging.getLogger(__name__)


def run_generate(args) -> int:
    """Generate the fallback table; returns the process exit status."""
    source = OurAirportsSource(cache_dir=str(args.cache_dir))
    if args.force_refresh:
        source.set_force_refresh()
    if args.never_refresh:
        source.set_never_refresh()

    builder = FallbackTableBuilder(
        source,
        output_file=Path(args.output),
        max_size_kb=args.max_size_kb,
        max_age_hours=args.cache_max_age_hours,
    )
    try:
        result = builder.generate()
    except GenerationError as e:
        logger.error(f"Generation failed: {e}")
        return 1

    if args.summary:
        log_summary(AirportFallbackService(result.table))
    logger.info(f"Generated {result.count} airports ({result.size_kb:.1f} KB) in {result.output_file}")
    return 0


def _load_service(args) -> AirportFallbackService:
    service = AirportFallbackService.from_file(args.table)
    if not service.is_available():
        logger.error(f"No airport data available in {args.table}")
    return service


def run_lookup(args) -> int:
    service = _load_service(args)
    if not service.is_available():
        return 1
    airport = service.get_airport_by_icao(args.code)
    if airport is None:
        logger.error(f"Airport {args.code} not found")
        return 1
    if args.json:
        print(json.dumps(airport.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(airport)
    return 0


def run_search(args) -> int:
    service = _load_service(args)
    if not service.is_available():
        return 1
    for airport in service.search_airports(args.prefix, limit=args.limit):
        print(f"{airport.icao:<5} {airport.name} ({airport.region})")
    return 0


def run_info(args) -> int:
    service = _load_service(args)
    if not service.is_available():
        return 1
    meta = service.get_meta()
    if meta is not None:
        print(f"Source: {meta.source} ({meta.source_url})")
        generated_at = meta.generated_at
        print(f"Generated: {generated_at.isoformat(sep=' ') if generated_at else meta.generated}")
    print(f"Airports: {service.get_count()}")
    print(f"Coverage: {service.get_coverage_description()}")
    print(coverage_breakdown(summarize_table(service)).to_string())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Offline airport fallback table generator and lookup')
    parser.add_argument('-v', '--verbose', help='Verbose output', action='store_true')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # Also accepted after the command; SUPPRESS keeps a leading -v
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('-v', '--verbose', help='Verbose output', action='store_true', default=argparse.SUPPRESS)

    generate = subparsers.add_parser('generate', parents=[common], help='Download OurAirports data and generate the table')
    generate.add_argument('-c', '--cache-dir', help='Directory to cache files', default=str(config.CACHE_DIR))
    generate.add_argument('-o', '--output', help='Output JSON file', default=str(config.OUTPUT_FILE))
    generate.add_argument('--force', '--force-refresh', dest='force_refresh', help='Force refresh of cached data', action='store_true')
    generate.add_argument('--never-refresh', help='Never refresh cached data if it exists', action='store_true')
    generate.add_argument('--cache-max-age-hours', help='Maximum age of cached downloads', type=float, default=config.CACHE_MAX_AGE_HOURS)
    generate.add_argument('--max-size-kb', help='Maximum size of the generated table', type=int, default=config.MAX_FILE_SIZE_KB)
    generate.add_argument('--summary', help='Log a coverage breakdown after generation', action='store_true')
    generate.set_defaults(func=run_generate)

    for name, help_text, func in [
        ('lookup', 'Show one airport', run_lookup),
        ('search', 'Search airports by code prefix', run_search),
        ('info', 'Show table metadata and coverage', run_info),
    ]:
        sub = subparsers.add_parser(name, parents=[common], help=help_text)
        sub.add_argument('-t', '--table', help='Airport table JSON file', default=str(config.OUTPUT_FILE))
        sub.set_defaults(func=func)
        if name == 'lookup':
            sub.add_argument('code', help='ICAO code')
            sub.add_argument('--json', help='Print as JSON', action='store_true')
        elif name == 'search':
            sub.add_argument('prefix', help='ICAO code prefix')
            sub.add_argument('-l', '--limit', help='Maximum number of results', type=int, default=config.DEFAULT_SEARCH_LIMIT)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
