#!/usr/bin/env python3
"""
Permalinker - Hierarchical Permalink Generator

Command line entry point. Loads content records into the record store,
computes their permalinks from the page hierarchy and writes them back.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from permalinker.builder import PathBuilder
from permalinker.config import ConfigManager, get_config
from permalinker.errors import PermalinkError
from permalinker.interface import interface_registry
from permalinker.models import PathOptions, Record
from permalinker.store import RecordStore


def setup_logging(cfg: ConfigManager, log_file: Optional[str] = None):
    """Configure logging for the application."""
    level = getattr(logging, cfg.get("logging.level", "INFO").upper())
    format_str = cfg.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file or cfg.log_filename)
        ]
    )


def load_records_file(path: str) -> List[Dict]:
    """
    Load record definitions from a YAML file.

    The file holds either a list of mappings or a mapping with a
    ``records`` key containing that list.

    Args:
        path: Path to the YAML file

    Returns:
        List of record mappings
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get("records", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of records in {path}")

    return [dict(item) for item in data]


def import_records(store: RecordStore, path: str) -> int:
    """
    Import records from a YAML file into the store.

    Args:
        store: Connected record store
        path: Path to the YAML file

    Returns:
        Number of records imported
    """
    records = load_records_file(path)
    for item in records:
        store.upsert_record(Record(**item))

    logging.info(f"Imported {len(records)} records from {path}")
    return len(records)


def generate_one(store: RecordStore, rid: str, options: PathOptions, write: bool = False,
                 permalink_field: str = "permalink") -> str:
    """
    Compute the permalink of a single stored record.

    Args:
        store: Connected record store
        rid: Id of the record
        options: Permalink options
        write: Store the computed permalink
        permalink_field: Name of the permalink attribute (for log messages)

    Returns:
        The permalink
    """
    record = store.get_record(rid)
    if record is None:
        raise KeyError(f"Record not found: {rid}")

    permalink = PathBuilder(options).build(record, store.resolver())
    if write:
        store.update_permalink(rid, permalink)
        logging.info(f"Wrote {permalink_field} for {rid}: {permalink}")

    return permalink


def generate_all(store: RecordStore, options: PathOptions,
                 write: bool = False) -> Tuple[Dict[str, str], Dict[str, str]]:
    """
    Compute permalinks for every stored record.

    Records whose chain is broken or cyclic are reported and skipped; the
    rest are still processed.

    Returns:
        Tuple of (permalinks by id, error messages by id)
    """
    builder = PathBuilder(options)
    resolver = store.resolver()
    permalinks: Dict[str, str] = {}
    failures: Dict[str, str] = {}

    for record in store.list_records():
        try:
            permalinks[record.id] = builder.build(record, resolver)
        except PermalinkError as e:
            logging.error(f"Failed to build permalink for {record.id}: {e}")
            failures[record.id] = str(e)
            continue

        if write:
            store.update_permalink(record.id, permalinks[record.id])

    logging.info(f"Built {len(permalinks)} permalinks, {len(failures)} failures")
    return permalinks, failures


def resolve_options(cfg: ConfigManager, args: argparse.Namespace) -> PathOptions:
    """Merge command line overrides into the configured permalink options."""
    values = dict(cfg.get_section("permalink"))
    if getattr(args, "prefix", None) is not None:
        values["urlPrefix"] = args.prefix
    if getattr(args, "placeholder", None) is not None:
        values["placeholder"] = args.placeholder
    return PathOptions.coerce(values)


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Permalinker - Hierarchical Permalink Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py init                         # Create the record store
  python main.py import pages.yaml            # Load records from YAML
  python main.py generate 42                  # Print the permalink of record 42
  python main.py generate-all --write         # Compute and store every permalink
  python main.py describe                     # Show the interface descriptor
        """
    )

    parser.add_argument("--config", type=str, help="Path to config.yaml")
    parser.add_argument("--db", type=str, help="Path to the record store (default from config)")
    parser.add_argument("--version", action="version", version="Permalinker 0.1.0")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Create the record store tables")

    import_parser = subparsers.add_parser("import", help="Import records from a YAML file")
    import_parser.add_argument("file", type=str, help="YAML file with records")

    generate_parser = subparsers.add_parser("generate", help="Build the permalink of one record")
    generate_parser.add_argument("id", type=str, help="Record id")
    generate_parser.add_argument("--write", action="store_true", help="Store the permalink")
    generate_parser.add_argument("--prefix", type=str, help="Override the URL prefix")
    generate_parser.add_argument("--placeholder", type=str, help="Override the placeholder")

    all_parser = subparsers.add_parser("generate-all", help="Build permalinks for every record")
    all_parser.add_argument("--write", action="store_true", help="Store the permalinks")
    all_parser.add_argument("--prefix", type=str, help="Override the URL prefix")
    all_parser.add_argument("--placeholder", type=str, help="Override the placeholder")

    subparsers.add_parser("describe", help="Print the interface descriptor as JSON")

    return parser.parse_args(argv)


def run_command(args: argparse.Namespace, cfg: ConfigManager) -> int:
    """
    Execute a parsed command.

    Returns:
        Process exit code
    """
    if args.command == "describe":
        definition = interface_registry.get_interface("permalink-generator")
        print(json.dumps(definition.to_dict(), indent=2))
        return 0

    options = resolve_options(cfg, args)
    db_path = args.db or cfg.database_filename

    with RecordStore(db_path, title_field=options.title_field, parent_field=options.parent_field) as store:
        store.initialize_database()

        if args.command == "init":
            print(f"Record store ready: {db_path}")
            return 0

        if args.command == "import":
            if not Path(args.file).exists():
                print(f"File not found: {args.file}")
                return 1
            try:
                count = import_records(store, args.file)
            except (ValueError, yaml.YAMLError) as e:
                logging.error(f"Failed to import {args.file}: {e}")
                print(f"Invalid records file {args.file}: {e}")
                return 1
            print(f"Imported {count} records")
            return 0

        if args.command == "generate":
            try:
                print(generate_one(store, args.id, options, args.write, cfg.permalink_field))
            except KeyError as e:
                print(e.args[0])
                return 1
            except PermalinkError as e:
                logging.error(f"Failed to build permalink for {args.id}: {e}")
                print(f"Error: {e}")
                return 1
            return 0

        permalinks, failures = generate_all(store, options, args.write)
        for rid, permalink in permalinks.items():
            print(f"{rid}\t{permalink}")
        for rid, message in failures.items():
            print(f"{rid}\tERROR: {message}")
        return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    cfg = ConfigManager(args.config) if args.config else get_config()
    setup_logging(cfg)

    logging.info("Permalinker - Hierarchical Permalink Generator")

    try:
        return run_command(args, cfg)
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        print("\nInterrupted.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
