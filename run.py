"""
One-button runner for the RNG meter drop-rate simulator.

Usage:
    python run.py

Reads dump.json from the current directory and writes out.json and
out_pretty.json. Use `meter-sim --help` for trial count, seed and paths.
"""

import sys
import logging

from meter_sim.pipeline import run_pipeline
from meter_sim.config import (
    DEFAULT_INPUT_PATH, DEFAULT_OUTPUT_PATH, DEFAULT_PRETTY_OUTPUT_PATH
)
from meter_sim.data import CatalogError
from meter_sim.diagnostics import format_results


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        results = run_pipeline(
            input_path=DEFAULT_INPUT_PATH,
            output_path=DEFAULT_OUTPUT_PATH,
            pretty_output_path=DEFAULT_PRETTY_OUTPUT_PATH,
        )
    except (OSError, CatalogError) as e:
        print(f"\nERROR: {e}")
        sys.exit(1)

    print("\n" + format_results(results))
    print(f"\n  Results: {DEFAULT_OUTPUT_PATH}, {DEFAULT_PRETTY_OUTPUT_PATH}")


if __name__ == '__main__':
    main()
