#!/usr/bin/env python3
"""
emlmr - EML Metadata Report
---------------------------
A CLI tool that reads email message files, extracts their header metadata
and writes it out as a console table or as delimited text.
"""

import argparse
import logging
import sys
import textwrap
from typing import List, Optional

import colorama
from colorama import Fore, Style

from .config.constants import ALL_FIELDS, DEFAULT_DELIMITER, SUPPORTED_DIGESTS, TAB_ALIASES, VERSION
from .core.exceptions import EmlmrError, OutputError, ValidationError, format_error_for_cli
from .core.models import ReportOptions
from .operations import list_fields, run_report

# Initialize colorama for cross-platform colored output
colorama.init(autoreset=True)


class ColoredFormatter(logging.Formatter):
    """Console formatter with one color per log level."""

    FORMATS = {
        logging.DEBUG: Fore.CYAN + "%(message)s" + Style.RESET_ALL,
        logging.INFO: "%(message)s",
        logging.WARNING: Fore.YELLOW + "%(message)s" + Style.RESET_ALL,
        logging.ERROR: Fore.RED + "%(message)s" + Style.RESET_ALL,
        logging.CRITICAL: Fore.RED + Style.BRIGHT + "%(message)s" + Style.RESET_ALL
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno)
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


def configure_logging(log_file: Optional[str] = None, verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging system with appropriate levels and handlers."""
    if verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO

    # Get the root logger and add handlers
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates on reconfiguration
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # Warnings about individual files always go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(ColoredFormatter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Always log details to file
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logger.addHandler(file_handler)


def delimiter_type(value: str) -> str:
    """argparse type for --delimiter: one character, or a tab alias."""
    if value in TAB_ALIASES:
        return '\t'
    if len(value) != 1:
        raise argparse.ArgumentTypeError(f"delimiter must be a single character, got {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='emlmr',
        description=f"emlmr v{VERSION} - EML Metadata Report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
        Examples:
          emlmr message.eml
          emlmr -f subject -f from -f date --digest md5 inbox/*.eml
          emlmr -r -o report.csv /path/to/mail
          emlmr -r -d '\\t' -o report.tsv /path/to/mail
          emlmr --list-fields -r /path/to/mail
        ''')
    )

    parser.add_argument('files', nargs='*', metavar='FILE',
                        help='Email message file, directory or glob pattern')
    parser.add_argument('--field', '-f', dest='fields', action='append', metavar='FIELD',
                        help="Include FIELD in report (repeatable, default: all)")
    parser.add_argument('--digest', dest='digests', action='append', choices=SUPPORTED_DIGESTS,
                        help='Compute message digest for each email (repeatable)')
    parser.add_argument('--recursive', '-r', action='store_true',
                        help='Read all files under each directory, recursively')
    parser.add_argument('--delimiter', '-d', type=delimiter_type, default=DEFAULT_DELIMITER, metavar='DELIM',
                        help="Use DELIM instead of COMMA for field delimiter ('\\t' for tab)")
    parser.add_argument('--output', '-o', metavar='FILE',
                        help='Write delimited output to FILE instead of a table on stdout')
    parser.add_argument('--list-fields', '-l', action='store_true',
                        help='List all metadata fields found instead of building a report')

    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress progress and informational output')
    parser.add_argument('--log-file', help='Also write a detailed log to this file')
    parser.add_argument('--version', action='version', version=f'emlmr v{VERSION}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the emlmr CLI tool."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.files:
        print("No files specified\n")
        parser.print_help()
        return 1

    try:
        options = ReportOptions(
            fields=args.fields or [ALL_FIELDS],
            digests=args.digests or [],
            recursive=args.recursive,
            delimiter=args.delimiter,
            output_file=args.output,
            show_progress=not args.quiet,
        )
    except ValidationError as e:
        parser.error(e.message)

    try:
        configure_logging(args.log_file, args.verbose and not args.quiet, args.quiet)
    except OSError as e:
        print(f"Cannot open log file {args.log_file}: {e}", file=sys.stderr)
        return 1

    try:
        if args.list_fields:
            list_fields(args.files, options)
        else:
            run_report(args.files, options)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 1
    except OutputError as e:
        logging.critical(format_error_for_cli(e, args.verbose))
        return 1
    except EmlmrError as e:
        logging.error(format_error_for_cli(e, args.verbose))
        return 1

    return 0


# --- Main entry point ---
if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        print(f"\nUnexpected error: {e}", file=sys.stderr)
        logging.error(f"Unhandled exception: {e}", exc_info=True)
        sys.exit(1)
