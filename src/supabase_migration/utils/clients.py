"""Construction of the source and destination SDK clients."""

from dataclasses import dataclass
from typing import Any

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud import storage
from supabase import create_client, Client

from ..models.config import FirebaseConfig, SupabaseConfig

FIREBASE_APP_NAME = "migration-source"


@dataclass
class FirebaseSource:
    """Handles on the source Firestore database and storage bucket."""
    firestore: Any
    bucket: storage.Bucket


def create_supabase_client(config: SupabaseConfig) -> Client:
    """Create a Supabase client authenticated with the service role key."""
    return create_client(config.url, config.service_role_key)


def create_firebase_source(config: FirebaseConfig) -> FirebaseSource:
    """Initialize a named Firebase app and return its Firestore and bucket."""
    if config.credentials_path:
        cred = credentials.Certificate(config.credentials_path)
    else:
        cred = credentials.Certificate(config.service_account_info())

    app = firebase_admin.initialize_app(
        cred,
        {"projectId": config.project_id, "storageBucket": config.storage_bucket},
        name=FIREBASE_APP_NAME,
    )

    gcs_client = storage.Client(project=config.project_id, credentials=cred.get_credential())

    return FirebaseSource(
        firestore=firestore.client(app),
        bucket=gcs_client.bucket(config.storage_bucket),
    )
