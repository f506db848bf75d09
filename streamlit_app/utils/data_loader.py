"""
Input parsing and data loading utilities with Streamlit caching.
"""
import logging
import re
from pathlib import Path
from typing import List, Optional

import streamlit as st

from .color_utils import ColorRecord

logger = logging.getLogger(__name__)

# Paths relative to streamlit_app directory
DATA_DIR = Path(__file__).parent.parent / "data"
SAMPLE_PALETTE_FILE = DATA_DIR / "sample_colors.txt"

# "<title> rgb(r,g,b)"; the greedy title makes the last rgb(...) suffix win
COLOR_LINE_PATTERN = re.compile(r'(.+)\s+rgb\(([0-9]+),([0-9]+),([0-9]+)\)')


def parse_color_line(line: str) -> Optional[ColorRecord]:
    """Parse a single '<title> rgb(r,g,b)' line.

    Returns:
        ColorRecord, or None if the line does not match
    """
    match = COLOR_LINE_PATTERN.search(line)
    if not match:
        return None

    title, r, g, b = match.groups()
    return ColorRecord(title.strip(), int(r), int(g), int(b))


def parse_color_lines(text: str) -> List[ColorRecord]:
    """Parse multi-line input into color records, in input order.

    Lines that don't match are dropped without error.
    """
    records = []
    skipped = 0

    for line in text.strip().split('\n'):
        record = parse_color_line(line)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    logger.debug(f"Parsed {len(records)} colors, skipped {skipped} lines")
    return records


def read_color_file(path) -> List[ColorRecord]:
    """Read and parse a UTF-8 color list file."""
    text = Path(path).read_text(encoding='utf-8')
    return parse_color_lines(text)


@st.cache_data
def load_sample_palette() -> str:
    """Load the bundled example input."""
    return SAMPLE_PALETTE_FILE.read_text(encoding='utf-8')
