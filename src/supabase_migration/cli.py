"""Command-line interface for the migration tool."""

import asyncio
import argparse
import sys
from typing import List, Optional

from .core.firebase_migrator import FirebaseMigrator
from .models.migration import parse_collection_mappings
from .utils.clients import create_firebase_source, create_supabase_client
from .utils.config_loader import load_config_from_env, create_sample_env_file, validate_config


class MigrationCLI:
    """Main CLI interface for migration operations."""

    def __init__(self, config_file: Optional[str] = None, dry_run: bool = False):
        try:
            self.config = load_config_from_env(config_file)
        except Exception as e:
            print(f"Failed to load configuration: {e}")
            sys.exit(1)

        # Validate configuration before any client is created
        config_errors = validate_config(self.config)
        if config_errors:
            print("Configuration errors:")
            for error in config_errors:
                print(f"  - {error}")
            sys.exit(1)

        if dry_run:
            self.config.dry_run = True

    def create_migrator(self, collections: Optional[List[str]] = None) -> FirebaseMigrator:
        """Build the clients and a migrator bound to them."""
        if collections:
            self.config.collections = parse_collection_mappings(collections)

        source = create_firebase_source(self.config.firebase)
        supabase = create_supabase_client(self.config.supabase)
        return FirebaseMigrator(self.config, supabase, source.firestore, source.bucket)

    async def run_migration(
        self,
        users: bool = True,
        files: bool = True,
        collections: bool = True,
        collection_names: Optional[List[str]] = None,
        failures_csv: Optional[str] = None
    ) -> None:
        """Run the selected migration steps, exiting non-zero on an unhandled error."""

        print("=== Starting Firebase to Supabase Migration ===")
        print(f"Dry run mode: {self.config.dry_run}")

        try:
            migrator = self.create_migrator(collection_names)
            await migrator.run_all(
                users=users,
                files=files,
                collections=collections,
                failures_csv=failures_csv
            )
            print("Migration completed successfully")
        except Exception as e:
            print(f"Migration failed: {e}")
            sys.exit(1)


def _add_common_options(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--dry-run",
        action="store_true",
        help="Read the source without writing anything to Supabase"
    )
    subparser.add_argument(
        "--failures-csv",
        type=str,
        help="Where to export failed items (default: migration_failures_<timestamp>.csv)"
    )


def _add_collections_option(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--collections",
        nargs="+",
        metavar="NAME[:TABLE]",
        help="Collections to migrate (default: MIGRATION_COLLECTIONS)"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Firebase to Supabase Migration Tool")
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to configuration file (defaults to .env in current directory)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Full migration command
    migrate_parser = subparsers.add_parser("migrate", help="Migrate users, files and collections")
    migrate_parser.add_argument("--skip-users", action="store_true", help="Skip user migration")
    migrate_parser.add_argument("--skip-files", action="store_true", help="Skip file migration")
    migrate_parser.add_argument("--skip-collections", action="store_true", help="Skip collection migration")
    _add_collections_option(migrate_parser)
    _add_common_options(migrate_parser)

    # Single steps
    users_parser = subparsers.add_parser("users", help="Migrate users only")
    _add_common_options(users_parser)

    files_parser = subparsers.add_parser("files", help="Migrate storage files only")
    _add_common_options(files_parser)

    collections_parser = subparsers.add_parser("collections", help="Migrate Firestore collections only")
    _add_collections_option(collections_parser)
    _add_common_options(collections_parser)

    # Create sample config
    subparsers.add_parser("init", help="Create sample configuration file")

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    if args.command == "init":
        create_sample_env_file()
        print("Sample configuration created. Edit .env.example and rename to .env")
        return

    # Initialize CLI with config
    cli = MigrationCLI(args.config, dry_run=args.dry_run)
    collection_names = getattr(args, "collections", None)

    # Run appropriate command
    if args.command == "migrate":
        asyncio.run(cli.run_migration(
            users=not args.skip_users,
            files=not args.skip_files,
            collections=not args.skip_collections,
            collection_names=collection_names,
            failures_csv=args.failures_csv
        ))
    elif args.command == "users":
        asyncio.run(cli.run_migration(files=False, collections=False, failures_csv=args.failures_csv))
    elif args.command == "files":
        asyncio.run(cli.run_migration(users=False, collections=False, failures_csv=args.failures_csv))
    elif args.command == "collections":
        asyncio.run(cli.run_migration(
            users=False,
            files=False,
            collection_names=collection_names,
            failures_csv=args.failures_csv
        ))


if __name__ == "__main__":
    main()
