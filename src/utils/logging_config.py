"""Simple logging setup - all logs go to stderr so generated output can use stdout."""

import logging
import sys


def setup_logging(verbose: bool = False):
    """Setup logging to stderr. WARNING by default so selector warnings always show, INFO when verbose."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr, force=True)
