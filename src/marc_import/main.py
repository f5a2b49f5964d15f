"""
Main entry for marc-import.

This module is intentionally thin:
- argument parsing
- configuration setup
- pipeline orchestration

No conversion logic lives here.
"""

from __future__ import annotations

import argparse

from marc_import.config import get_config, load_config
from marc_import.logger import get_logger, set_debug

from marc_import.core.context import ConversionContext
from marc_import.core.pipeline import Pipeline

log = get_logger("main")


# ---------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------
def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert MARC21 XML records into repository deposit records"
    )
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="Path to a MARC21 XML file or a saved SRU response",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="outputs/records.json",
        help="Final output JSON path",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Alternative YAML configuration file",
    )
    parser.add_argument(
        "--first",
        action="store_true",
        help="Convert only the first record of the input",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    return parser


# ---------------------------------------------------------
# Pipeline Runner
# ---------------------------------------------------------
def run(input_path: str, output_path: str, debug_flag: bool, config_path: str | None = None, first_only: bool = False):
    """
    Prepare context and execute the conversion pipeline.
    """

    cfg = load_config(config_path) if config_path else get_config()
    cfg.debug = bool(debug_flag)
    if cfg.debug:
        set_debug(True)

    log.info(f"Loading MARC input: {input_path}")

    ctx = ConversionContext(
        config=cfg,
        logger=log,
        input_path=input_path,
        output_path=output_path,
        first_only=first_only,
        debug=cfg.debug,
    )

    results = Pipeline(ctx).run()

    stats = ctx.stats
    log.info(
        "Converted %d of %d record(s); %d with suggestions",
        stats.get("records", 0),
        stats.get("total", 0),
        stats.get("with_suggestions", 0),
    )
    for message in ctx.errors:
        log.warning("SRU diagnostic: %s", message)

    log.info(f"Main pipeline complete. Output: {output_path}")
    return results


# ---------------------------------------------------------
# Program Entry Point
# ---------------------------------------------------------
def main() -> None:
    ap = build_arg_parser()
    args = ap.parse_args()

    try:
        run(
            input_path=args.input,
            output_path=args.output,
            debug_flag=args.debug,
            config_path=args.config,
            first_only=args.first,
        )
    except Exception as exc:
        log.exception(f"Unhandled exception in main: {exc}")
        raise


if __name__ == "__main__":
    main()
