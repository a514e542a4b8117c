"""Firebase to Supabase migration of users, files and collections."""

import csv
from datetime import datetime
from typing import Any, List, Optional

from asyncio_throttle import Throttler
from supabase import Client
from tqdm import tqdm

from ..models.config import MigrationConfig
from ..models.migration import CollectionMapping, MigrationLogEntry, MigrationStats, SourceUser
from ..utils.conversions import document_to_row
from .database import create_record
from .storage import upload_file


class FirebaseMigrator:
    """Copies Firebase users, storage files and Firestore collections into Supabase.

    Items are processed one at a time. A failing item is logged and skipped,
    it never aborts the rest of the batch.
    """

    def __init__(
        self,
        config: MigrationConfig,
        supabase: Client,
        firestore: Any,
        source_bucket: Any
    ):
        self.config = config
        self.supabase = supabase
        self.firestore = firestore
        self.source_bucket = source_bucket
        self.throttler = Throttler(rate_limit=config.rate_limit, period=1.0)
        self.stats = MigrationStats()
        self.failures: List[MigrationLogEntry] = []

    async def migrate_users(self) -> MigrationStats:
        """Create an auth user and a profile row for every source user document."""

        print("Migrating users...")
        docs = list(self.firestore.collection(self.config.users_collection).stream())
        self.stats.users_total += len(docs)

        if self.config.dry_run:
            print(f"DRY RUN: Would migrate {len(docs)} users")
            return self.stats

        for doc in tqdm(docs, desc="Migrating users"):
            data = doc.to_dict() or {}
            email = data.get("email")
            label = email if isinstance(email, str) and email else doc.id

            try:
                user = SourceUser.from_document(data)
                if not user.email:
                    raise ValueError("user document has no email")

                async with self.throttler:
                    response = self.supabase.auth.admin.create_user({
                        "email": user.email,
                        "email_confirm": True,
                        "user_metadata": {
                            "full_name": user.display_name,
                            "avatar_url": user.photo_url,
                        },
                    })
            except Exception as e:
                self.log_failure(label, "user_creation_error", f"Failed to create user {label}: {e}")
                continue

            self.stats.users_migrated += 1

            try:
                async with self.throttler:
                    self.supabase.table(self.config.profiles_table).upsert({
                        "id": response.user.id,
                        "username": user.profile_username,
                        "full_name": user.display_name,
                        "avatar_url": user.photo_url,
                    }).execute()
            except Exception as e:
                self.stats.profiles_failed += 1
                self.log_failure(label, "profile_upsert_error", f"Failed to create profile for {label}: {e}")

            print(f"Migrated user: {label}")

        return self.stats

    async def migrate_files(self) -> MigrationStats:
        """Copy every blob of the source bucket into the destination bucket."""

        print("Migrating files...")
        blobs = list(self.source_bucket.list_blobs())
        self.stats.files_total += len(blobs)

        if self.config.dry_run:
            print(f"DRY RUN: Would migrate {len(blobs)} files to {self.config.files_bucket}")
            return self.stats

        for blob in tqdm(blobs, desc="Migrating files"):
            file_name = blob.name

            try:
                content = blob.download_as_bytes()
                async with self.throttler:
                    upload_file(
                        self.supabase,
                        self.config.files_bucket,
                        file_name,
                        content,
                        content_type=blob.content_type,
                    )
            except Exception as e:
                self.log_failure(file_name, "file_upload_error", f"Failed to upload file {file_name}: {e}")
                continue

            self.stats.files_migrated += 1
            print(f"Migrated file: {file_name}")

        return self.stats

    async def migrate_collection(self, mapping: CollectionMapping) -> MigrationStats:
        """Insert every document of one collection as a row of its table."""

        print(f"Migrating collection: {mapping.collection} -> {mapping.table}")
        docs = list(self.firestore.collection(mapping.collection).stream())
        self.stats.documents_total += len(docs)

        if self.config.dry_run:
            print(f"DRY RUN: Would migrate {len(docs)} documents from {mapping.collection}")
            return self.stats

        for doc in tqdm(docs, desc=f"Migrating {mapping.collection}"):
            item_id = f"{mapping.collection}/{doc.id}"

            try:
                row = document_to_row(doc.id, doc.to_dict())
                async with self.throttler:
                    create_record(self.supabase, mapping.table, row)
            except Exception as e:
                self.log_failure(item_id, "document_migration_error", f"Failed to migrate document {item_id}: {e}")
                continue

            self.stats.documents_migrated += 1
            print(f"Migrated document: {item_id}")

        return self.stats

    async def migrate_collections(self, mappings: Optional[List[CollectionMapping]] = None) -> MigrationStats:
        """Migrate each configured collection in sequence."""

        print("Migrating collections...")
        if mappings is None:
            mappings = self.config.collections

        if not mappings:
            print("No collections configured, skipping")
            return self.stats

        for mapping in mappings:
            await self.migrate_collection(mapping)

        return self.stats

    async def run_all(
        self,
        users: bool = True,
        files: bool = True,
        collections: bool = True,
        failures_csv: Optional[str] = None
    ) -> MigrationStats:
        """Run the enabled migration steps in order and report the outcome."""

        if users:
            await self.migrate_users()
        if files:
            await self.migrate_files()
        if collections:
            await self.migrate_collections()

        self.print_summary()

        if self.failures:
            self.export_failures_to_csv(failures_csv)

        return self.stats

    def log_failure(self, item_id: Optional[str], log_type: str, message: str) -> None:
        """Record a per-item failure."""
        print(message)
        self.stats.errors += 1
        self.failures.append(MigrationLogEntry(
            item_id=item_id,
            log_type=log_type,
            message=message
        ))

    def export_failures_to_csv(self, filename: Optional[str] = None) -> Optional[str]:
        """Export all logged failures to a CSV file."""
        if not self.failures:
            print("No failures to export")
            return None

        if filename is None:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            filename = f"migration_failures_{timestamp}.csv"

        try:
            with open(filename, 'w', newline='', encoding='utf-8') as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=['log_type', 'item_id', 'message', 'created_at'])
                writer.writeheader()

                for failure in self.failures:
                    writer.writerow({
                        'log_type': failure.log_type,
                        'item_id': failure.item_id,
                        'message': failure.message,
                        'created_at': failure.created_at.isoformat()
                    })

            print(f"Exported {len(self.failures)} failures to: {filename}")
            return filename

        except Exception as e:
            print(f"Failed to export failures to CSV: {e}")
            return None
    def print_summary(self) -> None:
        """Print per-step counters."""
        stats = self.stats

        print("\n" + "=" * 50)
        print("MIGRATION SUMMARY" + (" (DRY RUN)" if self.config.dry_run else ""))
        print("=" * 50)
        print(f"  • Users migrated: {stats.users_migrated}/{stats.users_total}")
        print(f"  • Profile failures: {stats.profiles_failed}")
        print(f"  • Files migrated: {stats.files_migrated}/{stats.files_total}")
        print(f"  • Documents migrated: {stats.documents_migrated}/{stats.documents_total}")
        print(f"  • Errors: {stats.errors}")
        print("=" * 50)

    def get_migration_stats(self) -> MigrationStats:
        """Get current migration statistics."""
        return self.stats
