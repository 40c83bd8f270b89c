"""
Parser for the OurAirports CSV files.

The files are comma separated, with double-quoted fields that may contain
commas and doubled quotes (""). Each line is read by a two-state machine
(inside or outside quotes); rows are returned as dictionaries keyed by the
header line.
"""

import logging
from typing import Dict, List

logger = logging.getLogger(__name__)

DELIMITER = ','
QUOTE = '"'
BOM = '\ufeff'


def parse_csv_line(line: str) -> List[str]:
    """
    Split a single CSV line into its field values.

    Args:
        line: One line of CSV text, without the line terminator

    Returns:
        List of field values with the enclosing quotes removed
    """
    result = []
    current = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if in_quotes:
            if char == QUOTE:
                if i + 1 < length and line[i + 1] == QUOTE:
                    current.append(QUOTE)
                    i += 1
                else:
                    in_quotes = False
            else:
                current.append(char)
        else:
            if char == QUOTE:
                in_quotes = True
            elif char == DELIMITER:
                result.append(''.join(current))
                current = []
            else:
                current.append(char)
        i += 1

    result.append(''.join(current))
    return result


def parse_csv(text: str) -> List[Dict[str, str]]:
    """
    Parse CSV text into a list of rows keyed by header name.

    Blank lines are skipped. Missing trailing fields default to an
    empty string and extra fields are ignored.

    Args:
        text: Full CSV content, first line being the header

    Returns:
        List of dictionaries, one per data line
    """
    lines = text.split('\n')
    if not lines or not lines[0].strip():
        return []

    header = parse_csv_line(lines[0].lstrip(BOM).rstrip('\r'))
    rows = []

    for raw_line in lines[1:]:
        line = raw_line.strip()
        if not line:
            continue
        values = parse_csv_line(line)
        rows.append({
            column: values[idx] if idx < len(values) else ''
            for idx, column in enumerate(header)
        })

    logger.debug(f"Parsed {len(rows)} rows with {len(header)} columns")
    return rows
