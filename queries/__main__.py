"""
Command-line entry point: run one query through the pipeline and print JSON.

Usage:
    python -m queries "casual blu jeans under $30"
    python -m queries "compare red dresses" --no-augmentation --indent 0
"""

import argparse
import json
import logging
import sys

from xpertsearch.config import config
from xpertsearch.logging_config import configure_logging
from core.config.validators import validate_config_on_startup
from queries.services.augmentation import get_augmentation_service
from queries.services.query_pipeline import QueryPipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="XpertSearch query understanding")
    parser.add_argument("query", help="Free-text search query")
    parser.add_argument("--no-augmentation", action="store_true",
                        help="Skip the augmentation service (rule-based/static only)")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    parser.add_argument("--log-level", default=None, help="Override XPERTSEARCH_LOG_LEVEL")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(config)
    if args.log_level:
        logging.getLogger().setLevel(args.log_level.upper())
        logging.getLogger("queries").setLevel(args.log_level.upper())

    validate_config_on_startup(config)
    augmentation = None if args.no_augmentation else get_augmentation_service(config.augmentation)
    pipeline = QueryPipeline.from_config(config, augmentation=augmentation)

    result = pipeline.process(args.query)
    print(json.dumps(result.to_dict(), indent=args.indent or None, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
