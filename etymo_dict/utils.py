"""Utility functions for file I/O."""

from pathlib import Path
from typing import List

import structlog

log = structlog.get_logger()


def load_terms_from_file(file_path: Path) -> List[str]:
    """Load terms from a text file, one word or idiom per line."""
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    terms = []
    with open(file_path, 'r', encoding='utf-8') as f:
        for line in f:
            term = line.strip()
            if term and not term.startswith('#'):
                terms.append(term)

    log.info("Loaded terms from file", count=len(terms), file=str(file_path))
    return terms
