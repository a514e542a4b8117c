"""Migration data models."""

from datetime import datetime
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field


class CollectionMapping(BaseModel):
    """Source Firestore collection and the table its documents land in."""
    collection: str
    table: str

    @classmethod
    def parse(cls, entry: str) -> "CollectionMapping":
        """Parse ``name`` or ``name:table``."""
        collection, _, table = entry.strip().partition(":")
        collection = collection.strip()
        if not collection:
            raise ValueError(f"Invalid collection mapping: {entry!r}")
        return cls(collection=collection, table=table.strip() or collection)


def parse_collection_mappings(entries: List[str]) -> List[CollectionMapping]:
    """Parse a list of collection entries, ignoring blanks."""
    return [CollectionMapping.parse(entry) for entry in entries if entry and entry.strip()]


class SourceUser(BaseModel):
    """User document read from the source users collection."""
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    username: Optional[str] = None

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> "SourceUser":
        return cls(
            email=data.get("email"),
            display_name=data.get("displayName"),
            photo_url=data.get("photoURL"),
            username=data.get("username"),
        )

    @property
    def profile_username(self) -> Optional[str]:
        """Username for the profile row, falling back to the email's local part."""
        if self.username:
            return self.username
        if self.email:
            return self.email.split("@")[0]
        return None


class MigrationLogEntry(BaseModel):
    """Migration log entry model."""
    item_id: Optional[str]
    log_type: str  # 'user_creation_error', 'profile_upsert_error', 'file_upload_error', 'document_migration_error'
    message: str
    created_at: datetime = Field(default_factory=datetime.now)


class MigrationStats(BaseModel):
    """Migration statistics model."""
    users_total: int = 0
    users_migrated: int = 0
    profiles_failed: int = 0
    files_total: int = 0
    files_migrated: int = 0
    documents_total: int = 0
    documents_migrated: int = 0
    errors: int = 0

    @property
    def completion_percentage(self) -> float:
        """Calculate completion percentage over every source item seen."""
        total = self.users_total + self.files_total + self.documents_total
        if total == 0:
            return 0.0
        migrated = self.users_migrated + self.files_migrated + self.documents_migrated
        return (migrated / total) * 100
