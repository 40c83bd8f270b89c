"""
Diagnostic summaries of a fallback table.

Used by the command line after a generation run and by the 'info'
command to show what the table covers.
"""

import logging

import pandas as pd

from .service import AirportFallbackService
from .utils.coverage import region_of

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ['icao', 'country', 'coverage', 'region', 'type', 'runways', 'longest_runway_ft', 'hard_runway']


def summarize_table(service: AirportFallbackService) -> pd.DataFrame:
    """
    One row per airport of the table.

    Columns: icao, country, coverage (North America / Europe), region,
    type, runways (count), longest_runway_ft, hard_runway.
    """
    rows = []
    for airport in service:
        longest = airport.longest_runway
        rows.append({
            'icao': airport.icao,
            'country': airport.country,
            'coverage': region_of(airport.country),
            'region': airport.region,
            'type': airport.type,
            'runways': len(airport.runways),
            'longest_runway_ft': longest.length_ft if longest else 0,
            'hard_runway': airport.has_hard_runway,
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def coverage_breakdown(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Airport counts per country and type.

    Returns:
        DataFrame indexed by country with one column per airport type and
        a 'total' column, sorted by decreasing total
    """
    if frame.empty:
        return pd.DataFrame(columns=['total'])
    counts = frame.groupby(['country', 'type']).size().unstack(fill_value=0)
    counts['total'] = counts.sum(axis=1)
    return counts.sort_values('total', ascending=False)


def log_summary(service: AirportFallbackService, top: int = 10) -> pd.DataFrame:
    """Log the coverage breakdown of a table and return the per-airport frame."""
    frame = summarize_table(service)
    if frame.empty:
        logger.info("Table is empty")
        return frame

    by_coverage = frame.groupby('coverage').size()
    for coverage, count in by_coverage.items():
        logger.info(f"  {coverage}: {count} airports")
    logger.info(f"  Without runways: {int((frame['runways'] == 0).sum())}")
    logger.info(f"  Top countries:\n{coverage_breakdown(frame).head(top).to_string()}")
    return frame
