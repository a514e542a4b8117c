"""Configuration models for migration system."""

from typing import List, Optional
from pydantic import BaseModel, Field

from .migration import CollectionMapping


class FirebaseConfig(BaseModel):
    """Source Firebase project configuration."""
    project_id: str
    client_email: Optional[str] = None
    private_key: Optional[str] = None
    storage_bucket: str = ""
    credentials_path: Optional[str] = None

    def service_account_info(self) -> dict:
        """Build the service account mapping expected by firebase_admin."""
        return {
            "type": "service_account",
            "project_id": self.project_id,
            "client_email": self.client_email,
            "private_key": self.private_key,
            "token_uri": "https://oauth2.googleapis.com/token",
        }


class SupabaseConfig(BaseModel):
    """Supabase configuration."""
    url: str
    service_role_key: str


class MigrationConfig(BaseModel):
    """Complete migration configuration."""
    firebase: FirebaseConfig
    supabase: SupabaseConfig
    users_collection: str = Field(default="users", description="Source collection holding user documents")
    profiles_table: str = Field(default="profiles", description="Destination table for user profiles")
    files_bucket: str = Field(default="user-content", description="Destination storage bucket")
    collections: List[CollectionMapping] = Field(default_factory=list, description="Collections to copy")
    rate_limit: int = Field(default=10, description="Maximum destination writes per second")
    dry_run: bool = Field(default=False, description="Run in dry-run mode without making changes")
