"""Pacewise CLI entry point."""

import logging
import sys

from pacewise import generate_summary, load_data

if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    path = sys.argv[1] if len(sys.argv) > 1 else "sample_data.json"
    print(generate_summary(load_data(path)))
