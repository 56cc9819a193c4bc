#!/usr/bin/env python3
"""
SQL Aligner - Script principal.

Aligne les clauses VALUES (et les CREATE TABLE) des fichiers SQL.

Usage:
    python -m sql_aligner fichier.sql autre.sql
    python -m sql_aligner --all --dry-run
    cat dump.sql | python -m sql_aligner > aligned.sql
"""

import argparse
import logging
import sys
from pathlib import Path

from .formatter import FormatOptions, SQLAligner
from .runner import RunConfig, find_sql_files, format_files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sql-aligner",
        description="Formats SQL files with conservative column alignment.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemples:
  # Formater des fichiers en place
  python -m sql_aligner seed.sql fixtures.sql

  # Tous les fichiers .sql du répertoire courant et des sous-répertoires
  python -m sql_aligner --all

  # Voir ce qui changerait sans rien écrire
  python -m sql_aligner --all --dry-run

  # Garder une copie .bak avant d'écrire
  python -m sql_aligner --backup seed.sql

  # Depuis l'entrée standard
  cat seed.sql | python -m sql_aligner
"""
    )

    parser.add_argument(
        "files",
        nargs="*",
        help="SQL files to format"
    )

    parser.add_argument(
        "-a", "--all",
        action="store_true",
        help="Format all SQL files in current directory and subdirectories"
    )

    parser.add_argument(
        "-d", "--dry-run",
        action="store_true",
        help="Show formatting changes without modifying files"
    )

    parser.add_argument(
        "-b", "--backup",
        action="store_true",
        help="Create backup files before formatting"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--indent",
        type=int,
        default=4,
        help="Indentation of clause lines (default: 4)"
    )

    parser.add_argument(
        "--no-create-table",
        action="store_true",
        help="Leave CREATE TABLE column lists untouched"
    )

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = FormatOptions(
        indent_size=args.indent,
        format_create_tables=not args.no_create_table,
    )
    config = RunConfig(
        dry_run=args.dry_run,
        backup=args.backup,
        options=options,
    )

    # Lecture depuis stdin si aucun fichier n'est donné
    if args.all:
        paths = find_sql_files(Path.cwd())
        logging.getLogger(__name__).debug("Found %d SQL files", len(paths))
    elif args.files:
        paths = args.files
    else:
        sql = sys.stdin.read()
        sys.stdout.write(SQLAligner(options).format(sql))
        return 0

    if args.dry_run:
        print("Dry run mode enabled - no files will be modified")
    if args.backup and args.verbose:
        print("Backup mode enabled - creating .bak files before formatting")

    results, errors = format_files(paths, config)

    for result in results:
        if not result.changed:
            continue
        if result.written:
            print(f"Formatted: {result.path}")
        else:
            print(f"Would format: {result.path}")

    for error in errors:
        print(f"Error formatting {error.path}: {error.message}", file=sys.stderr)

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
