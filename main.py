"""multi-dup-filter: collapse periodically repeating lines in log streams."""

import json
import logging
import os
import sys
from argparse import ArgumentParser
from dataclasses import replace

from dupfilter.config import FilterConfig, load_config, load_yaml_config
from dupfilter.dispatcher import Dispatcher, StreamSink
from dupfilter.filter import MultiDupFilter
from dupfilter.formatter import FORMATTERS, get_formatter
from dupfilter.locks import make_lock
from dupfilter.parser import parse_line
from dupfilter.reader import STDIN, expand_paths, read_multiple, tail_file

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="multi-dup-filter",
        description="Collapse repeating cycles of log lines into summary lines.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Log file path(s) or glob pattern(s); '-' or nothing reads stdin",
    )
    parser.add_argument(
        "--max-period",
        type=int,
        help="Longest cycle, in lines, to look for (default: 8)",
    )
    parser.add_argument(
        "--level",
        help="Level of the synthesized summary lines (default: info)",
    )
    parser.add_argument(
        "--config",
        help="YAML file with dup_filter settings",
    )
    parser.add_argument(
        "--output",
        choices=sorted(FORMATTERS),
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--tail",
        action="store_true",
        help="Follow a single log file for new lines (like tail -f)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print filter counters as JSON to stderr when done",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log filter internals to stderr",
    )
    return parser


def resolve_config(args) -> FilterConfig:
    """Defaults < YAML < environment < command line."""
    config = load_config(load_yaml_config(args.config))
    overrides = {}
    if args.max_period is not None:
        overrides["max_period"] = args.max_period
    if args.level is not None:
        overrides["notification_level"] = args.level
    if args.output is not None:
        overrides["output"] = args.output
    return replace(config, **overrides).validate()


def run_pipeline(args, out=None) -> dict:
    """Read, filter and print; returns the filter's metrics snapshot."""
    config = resolve_config(args)
    paths = expand_paths(args.files)

    if args.tail and (len(paths) != 1 or paths[0] == STDIN):
        raise ValueError("--tail requires a single file")

    sink = StreamSink(out if out is not None else sys.stdout, get_formatter(config.output))
    dup_filter = MultiDupFilter(
        config.max_period,
        config.notification_level,
        forward=Dispatcher([sink]),
        lock=make_lock(config.thread_safe),
    )
    logger.info("Filtering %s with max period %d", ", ".join(paths), config.max_period)

    lines = tail_file(paths[0]) if args.tail else read_multiple(paths)
    try:
        for line, path, line_no in lines:
            record = parse_line(
                line,
                default_logger=os.path.basename(path),
                source_file=path,
                line_no=line_no,
            )
            if record is not None:
                dup_filter.process(record)
    except KeyboardInterrupt:
        logger.info("Interrupted, reporting pending duplicates")
    # a broken output pipe propagates without flushing into the dead stream
    dup_filter.flush()

    snapshot = dup_filter.metrics.snapshot()
    if args.stats:
        print(json.dumps(snapshot), file=sys.stderr)
    return snapshot


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )

    try:
        run_pipeline(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, BrokenPipeError):
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())
