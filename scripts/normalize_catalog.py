"""
Offline catalog normalization.

Reads the raw provider catalog (data/catalog_raw.json by default) and writes
the canonical, de-duplicated catalog used for enrollment enrichment.

Usage:
    python scripts/normalize_catalog.py [input_raw.json] [output_clean.json]
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from degree_planner.config import DATA_DIR, RAW_CATALOG_FILE, CLEAN_CATALOG_FILE
from degree_planner.engines import CourseNormalizer
from degree_planner.logging_setup import configure_logging


def run(argv):
    input_path = argv[0] if len(argv) > 0 else DATA_DIR / RAW_CATALOG_FILE
    output_path = argv[1] if len(argv) > 1 else DATA_DIR / CLEAN_CATALOG_FILE

    cleaned = CourseNormalizer().normalize_file(input_path, output_path)
    print(f"Input normalized -> {len(cleaned)} canonical course(s) in {output_path}")


if __name__ == "__main__":
    configure_logging()
    run(sys.argv[1:])
