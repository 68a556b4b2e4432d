#!/usr/bin/env python3
"""
Command line entry point.

    aios-install [-v | --verbose]

Exit code 0 means aios-cli is installed and resolves through PATH; 1 means a
fatal error was logged to %TEMP%\\hyperspace_install.log.
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import InstallerConfig
from .logging_utils import configure_logging
from .orchestrator import run_installation


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aios-install",
        description="Install the AIOS CLI, with CUDA support when an NVIDIA GPU is present.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="echo every log line to the console, not just errors",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = InstallerConfig.from_environment(verbose=args.verbose)
    configure_logging(config)

    exit_code = run_installation(config)
    if exit_code == 0:
        print(f"{config.command_name} installed to {config.install_dir}. Open a new terminal to use it.")
    else:
        print(f"Installation failed. See {config.log_file} for details.", file=sys.stderr)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
