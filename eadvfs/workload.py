# workload.py

import logging
import math
from pathlib import Path

logger = logging.getLogger(__name__)


class WorkloadError(ValueError):
    """Raised when a job list is empty or can't be parsed."""


def sample_jobs():
    """Mixed sample job set as (arrival_ms, burst_ms) pairs."""
    return [
        (0, 120),
        (20, 30),
        (40, 50),
        (100, 200),
        (150, 20),
        (300, 400),
        (350, 60),
    ]


def parse_jobs(lines, source='<input>'):
    """
    Parse one 'arrival burst' pair per line. Fields may be separated by
    whitespace or a comma; blank lines and '#' comments are skipped.
    """
    jobs = []
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        fields = line.replace(',', ' ').split()
        if len(fields) != 2:
            raise WorkloadError(f"{source}:{line_number}: expected 'arrival burst', got {line!r}")
        try:
            arrival, burst = float(fields[0]), float(fields[1])
        except ValueError:
            raise WorkloadError(f"{source}:{line_number}: arrival and burst must be numbers, got {line!r}")

        if not (math.isfinite(arrival) and math.isfinite(burst)):
            raise WorkloadError(f"{source}:{line_number}: arrival and burst must be finite, got {line!r}")
        if arrival < 0:
            raise WorkloadError(f"{source}:{line_number}: arrival cannot be negative ({arrival})")
        if burst <= 0:
            raise WorkloadError(f"{source}:{line_number}: burst must be positive ({burst})")
        jobs.append((arrival, burst))

    if not jobs:
        raise WorkloadError(f"{source}: no jobs found")
    return jobs


def load_jobs(path):
    path = Path(path)
    with open(path, 'r') as f:
        jobs = parse_jobs(f, source=str(path))
    logger.info("Loaded %d job(s) from %s", len(jobs), path)
    return jobs
