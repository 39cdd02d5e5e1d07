"""
gofmt-import CLI

Entry point: environment loading, argument parsing and dispatch only.
All command logic lives in cli.handlers.
"""

import sys
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from cli.wiring import build_parser, dispatch_command
from gofmt_import import __version__


def _load_environment(env_file: Optional[Path] = None) -> None:
    """Load GOFMT_IMPORT_* settings from .env (cwd or env_file); exported variables win."""
    load_dotenv(env_file or find_dotenv(usecwd=True), override=False)


def main(argv: Optional[list] = None) -> int:
    _load_environment()
    parser = build_parser(version=__version__)
    args = parser.parse_args(argv)
    return dispatch_command(parser, args)


if __name__ == "__main__":
    sys.exit(main())
