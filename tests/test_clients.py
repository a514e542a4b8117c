"""Test client construction."""

from unittest.mock import Mock, patch

from supabase_migration.models.config import FirebaseConfig, SupabaseConfig
from supabase_migration.utils.clients import (
    FIREBASE_APP_NAME,
    create_firebase_source,
    create_supabase_client,
)


@patch('supabase_migration.utils.clients.create_client')
def test_create_supabase_client_uses_service_role_key(mock_create_client):
    create_supabase_client(SupabaseConfig(url="https://test.supabase.co", service_role_key="service-key"))

    mock_create_client.assert_called_once_with("https://test.supabase.co", "service-key")


@patch('supabase_migration.utils.clients.storage.Client')
@patch('supabase_migration.utils.clients.firestore.client')
@patch('supabase_migration.utils.clients.firebase_admin.initialize_app')
@patch('supabase_migration.utils.clients.credentials.Certificate')
def test_create_firebase_source_from_service_account(
    mock_certificate, mock_initialize_app, mock_firestore_client, mock_storage_client
):
    config = FirebaseConfig(
        project_id="test-project",
        client_email="svc@test-project.iam.gserviceaccount.com",
        private_key="key",
        storage_bucket="test-project.appspot.com"
    )
    mock_bucket = Mock()
    mock_storage_client.return_value.bucket.return_value = mock_bucket

    source = create_firebase_source(config)

    mock_certificate.assert_called_once_with(config.service_account_info())
    mock_initialize_app.assert_called_once_with(
        mock_certificate.return_value,
        {"projectId": "test-project", "storageBucket": "test-project.appspot.com"},
        name=FIREBASE_APP_NAME,
    )
    mock_storage_client.assert_called_once_with(
        project="test-project",
        credentials=mock_certificate.return_value.get_credential.return_value,
    )
    mock_storage_client.return_value.bucket.assert_called_once_with("test-project.appspot.com")
    assert source.firestore is mock_firestore_client.return_value
    assert source.bucket is mock_bucket


@patch('supabase_migration.utils.clients.storage.Client')
@patch('supabase_migration.utils.clients.firestore.client')
@patch('supabase_migration.utils.clients.firebase_admin.initialize_app')
@patch('supabase_migration.utils.clients.credentials.Certificate')
def test_create_firebase_source_from_credentials_file(
    mock_certificate, mock_initialize_app, mock_firestore_client, mock_storage_client
):
    config = FirebaseConfig(
        project_id="test-project",
        storage_bucket="test-project.appspot.com",
        credentials_path="/secrets/service-account.json"
    )

    create_firebase_source(config)

    mock_certificate.assert_called_once_with("/secrets/service-account.json")
