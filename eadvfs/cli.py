# cli.py

import argparse
import logging
import sys

from eadvfs.config import SchedulerConfig, load_config
from eadvfs.metrics import format_report
from eadvfs.power import default_power_model
from eadvfs.scheduler import simulate
from eadvfs.workload import load_jobs, sample_jobs


def build_parser():
    parser = argparse.ArgumentParser(description='Energy-aware DVFS CPU scheduling simulator')
    parser.add_argument('jobfile',
                        nargs='?',
                        help="job file, one 'arrival_ms burst_ms' pair per line "
                             "(sample job set if omitted)",
                        metavar='filename')

    parser.add_argument('--config', '-c',
                        help='key = value file with tunables and frequency levels',
                        metavar='filename')

    parser.add_argument('--verbose', '-v',
                        action='count',
                        default=0,
                        help='verbose output (-vv for every dispatch)')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        level = logging.DEBUG if args.verbose > 1 else logging.INFO
        logging.basicConfig(format='%(levelname)s: %(message)s', level=level)

    try:
        if args.config:
            config, power_model = load_config(args.config)
        else:
            config, power_model = SchedulerConfig(), default_power_model()

        if args.jobfile:
            jobs = load_jobs(args.jobfile)
        else:
            jobs = sample_jobs()
            print("No input file given, using sample jobset.")
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    run = simulate(jobs, power_model, config)
    print(format_report(run))
    return 0


if __name__ == '__main__':
    sys.exit(main())
