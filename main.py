"""
Container entrypoint: resolve configuration, start nginx, exec OpenObserve.
"""

import argparse
import logging
import os
import sys
from typing import Mapping, Optional

from dotenv import load_dotenv

from zo_bootstrap import config
from zo_bootstrap.sequencer import BootstrapSequencer


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="OpenObserve deployment bootstrap")
    parser.add_argument(
        "--env-file",
        default=None,
        help="Optional .env file; real environment variables take precedence",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and validate configuration without launching processes",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=config.LOG_LEVELS,
        default=None,
        help=f"Defaults to ${config.LOG_LEVEL_ENV}, else {config.DEFAULT_LOG_LEVEL}",
    )
    return parser.parse_args(argv)


def resolve_log_level(cli_level: Optional[str], environ: Mapping[str, str]) -> str:
    """--log-level wins, then ZO_BOOTSTRAP_LOG_LEVEL; unknown names fall back to INFO."""
    if cli_level:
        return cli_level
    level = (environ.get(config.LOG_LEVEL_ENV) or "").upper()
    return level if level in config.LOG_LEVELS else config.DEFAULT_LOG_LEVEL


def main(argv=None) -> int:
    args = parse_args(argv)

    # Load .env for local runs without overriding the deployment environment
    load_dotenv(dotenv_path=args.env_file, override=False)

    # The only read of the ambient environment; everything below gets the snapshot
    environ = dict(os.environ)

    logging.basicConfig(
        level=resolve_log_level(args.log_level, environ),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    sequencer = BootstrapSequencer(dry_run=args.dry_run)
    return sequencer.run(environ)


if __name__ == "__main__":
    sys.exit(main())
