import logging
import sys

def setup_logging(level: str = "INFO"):
    levelno = getattr(logging, str(level).upper(), logging.INFO)
    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    # stdout carries identifiers and JSON records only
    logging.basicConfig(level=levelno, format=fmt, stream=sys.stderr)
