"""Command line entry point: ``python -m flagdoc module:Config``."""

from __future__ import annotations

import argparse
import importlib
import sys
from typing import Any, Iterable

from flagdoc.config import FLAGDOC_LOG_LEVEL
from flagdoc.exceptions import FlagdocError
from flagdoc.output_formatter import format_json, format_tree
from flagdoc.pipeline import build_config_tree
from flagdoc.utils.logging_config import configure_logging, get_logger
from flagdoc.walker import RootBlock

logger = get_logger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_object(target: str) -> Any:
    """Import ``module:attribute`` (the attribute may be dotted)."""
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"expected module:attribute, got {target!r}")
    obj: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        obj = getattr(obj, part)
    return obj


def _check_root_blocks(obj: Any) -> list[RootBlock]:
    if isinstance(obj, (str, bytes)) or not isinstance(obj, Iterable):
        raise TypeError(f"root blocks must be a sequence of RootBlock, got {type(obj).__name__}")
    blocks = list(obj)
    for block in blocks:
        if not isinstance(block, RootBlock):
            raise TypeError(f"root blocks must be a sequence of RootBlock, got an item of type {type(block).__name__}")
    return blocks


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="flagdoc",
        description="Print the documented block tree of a configuration model and its CLI flags.",
    )
    parser.add_argument("config", help="Configuration model class, as module:ClassName")
    parser.add_argument(
        "--root-blocks",
        help="Sequence of RootBlock documented as top-level sections, as module:ATTRIBUTE",
    )
    parser.add_argument("--format", choices=("json", "tree"), default="json", help="Output format")
    parser.add_argument(
        "--require-flags",
        action="store_true",
        default=None,
        help="Fail if a configuration field has no CLI flag",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default=FLAGDOC_LOG_LEVEL,
        help="Logging level",
    )
    args = parser.parse_args(argv)

    # argparse does not check defaults against choices.
    if args.log_level not in _LOG_LEVELS:
        print(f"Invalid log level {args.log_level!r}, expected one of {', '.join(_LOG_LEVELS)}", file=sys.stderr)
        return 1
    configure_logging(args.log_level)

    try:
        config_class = load_object(args.config)
        root_blocks = load_object(args.root_blocks) if args.root_blocks else ()
        root_blocks = _check_root_blocks(root_blocks)
        cfg = config_class()
    except (ImportError, AttributeError, TypeError, ValueError) as exc:
        print(f"Cannot load the configuration: {exc}", file=sys.stderr)
        return 1

    try:
        blocks = build_config_tree(cfg, root_blocks, require_flags=args.require_flags)
    except FlagdocError as exc:
        logger.debug("Documentation run failed", exc_info=True)
        print(f"An error occurred while generating the doc: {exc}", file=sys.stderr)
        return 1

    print(format_json(blocks) if args.format == "json" else format_tree(blocks))
    return 0


if __name__ == "__main__":
    sys.exit(main())
