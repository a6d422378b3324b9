from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Union

from blocking_statsd.client import BlockingStatsDClient
from blocking_statsd.config_loader import StatsdCfg, load_yaml, parse_config
from blocking_statsd.encoder import MetricType, encode
from blocking_statsd.errors import StatsDClientError, logging_error_handler

log = logging.getLogger("run_client")

KINDS = {
    "count": MetricType.COUNTER,
    "increment": MetricType.COUNTER,
    "decrement": MetricType.COUNTER,
    "gauge": MetricType.GAUGE,
    "time": MetricType.TIMER,
    "histogram": MetricType.HISTOGRAM,
}


def parse_value(text: str) -> Union[int, float]:
    try:
        return int(text)
    except ValueError:
        return float(text)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Send a single metric to a statsd daemon. The printed line is what would be sent; "
        "with --sample-rate below 1.0 the datagram may be dropped by sampling.",
    )
    ap.add_argument("--config", default=None, help="Path to YAML config with a 'statsd:' section")
    ap.add_argument("--host", default=None, help="Daemon host (overrides config)")
    ap.add_argument("--port", type=int, default=None, help="Daemon port (overrides config)")
    ap.add_argument("--prefix", default=None, help="Metric prefix (overrides config)")
    ap.add_argument("--tag", action="append", default=[], help="Tag to attach, repeatable (e.g. region:us)")
    ap.add_argument("--sample-rate", type=float, default=1.0, help="Sample rate in (0, 1] (default: 1.0)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    ap.add_argument("kind", choices=sorted(KINDS), help="Metric kind")
    ap.add_argument("aspect", help="Metric name")
    ap.add_argument("value", nargs="?", default=None, help="Metric value (not used by increment/decrement)")
    return ap


def resolve_cfg(args: argparse.Namespace) -> StatsdCfg:
    cfg = parse_config(load_yaml(Path(args.config))) if args.config else StatsdCfg()
    overrides = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.prefix is not None:
        overrides["prefix"] = args.prefix
    return replace(cfg, **overrides)


def resolve_value(kind: str, raw: Optional[str]) -> Union[int, float]:
    if kind == "increment":
        return 1
    if kind == "decrement":
        return -1
    if raw is None:
        raise ValueError(f"'{kind}' needs a value")
    return parse_value(raw)


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = resolve_cfg(args)
    if not cfg.enabled:
        log.info("statsd is disabled in config; nothing sent")
        return 0

    try:
        value = resolve_value(args.kind, args.value)
    except ValueError as e:
        ap.error(str(e))

    line = encode(cfg.prefix, args.aspect, value, KINDS[args.kind], args.sample_rate, cfg.constant_tags, args.tag)
    print(line)

    try:
        client = BlockingStatsDClient(
            cfg.prefix,
            cfg.host,
            cfg.port,
            constant_tags=cfg.constant_tags,
            error_handler=logging_error_handler(log),
        )
    except StatsDClientError as e:
        log.error("%s: %r", e, e.__cause__)
        return 2

    with client:
        if args.kind == "gauge":
            client.gauge(args.aspect, value, args.tag, args.sample_rate)
        elif args.kind == "time":
            client.time(args.aspect, value, args.tag, args.sample_rate)
        elif args.kind == "histogram":
            client.histogram(args.aspect, value, args.tag, args.sample_rate)
        else:
            client.count(args.aspect, value, args.tag, args.sample_rate)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
