#!/usr/bin/env python3
"""
Example script demonstrating library usage of the emlmr package
"""

import argparse

from emlmr import ReportOptions, process_files, resolve_paths
from emlmr.reporters import TableReporter


def summarize_senders(paths, recursive=False):
    """
    Print a table of sender, subject and MD5 digest for each message.

    Args:
        paths: Files, directories or glob patterns
        recursive: Whether to search directories recursively
    """
    options = ReportOptions(fields=["from", "subject"], digests=["md5"], recursive=recursive)

    files = resolve_paths(paths, options.recursive)
    print(f"Found {len(files)} files")

    report = process_files(files, options)
    TableReporter().write_report(report.columns(), report.rows)

    senders = sorted({row.get("from", "") for row in report.rows} - {""})
    print(f"\n{len(senders)} distinct senders")


def main():
    """Main function."""
    parser = argparse.ArgumentParser(description="emlmr example script")
    parser.add_argument("paths", nargs="+", help="Message files, directories or globs")
    parser.add_argument("--recursive", "-r", action="store_true", help="Search recursively")
    args = parser.parse_args()

    summarize_senders(args.paths, args.recursive)


if __name__ == "__main__":
    main()
