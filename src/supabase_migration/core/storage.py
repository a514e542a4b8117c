"""Supabase Storage helpers."""

from typing import Any, Dict, List, Optional, Union

from supabase import Client

DEFAULT_CACHE_CONTROL = "3600"
DEFAULT_SIGNED_URL_EXPIRY = 60


def _file_options(content_type: Optional[str], cache_control: Optional[str]) -> Dict[str, str]:
    """Upload options; existing objects at the same path are overwritten."""
    options = {
        "cache-control": cache_control or DEFAULT_CACHE_CONTROL,
        "upsert": "true",
    }
    if content_type:
        options["content-type"] = content_type
    return options


def upload_file(
    client: Client,
    bucket: str,
    path: str,
    file: bytes,
    content_type: Optional[str] = None,
    cache_control: Optional[str] = None
):
    """Upload ``file`` to ``bucket/path``."""
    return client.storage.from_(bucket).upload(
        path,
        file,
        file_options=_file_options(content_type, cache_control),
    )


def update_file(
    client: Client,
    bucket: str,
    path: str,
    file: bytes,
    content_type: Optional[str] = None,
    cache_control: Optional[str] = None
):
    """Replace the object at ``bucket/path``."""
    return client.storage.from_(bucket).update(
        path,
        file,
        file_options=_file_options(content_type, cache_control),
    )


def download_file(client: Client, bucket: str, path: str) -> bytes:
    return client.storage.from_(bucket).download(path)


def get_public_url(client: Client, bucket: str, path: str) -> str:
    return client.storage.from_(bucket).get_public_url(path)


def list_files(client: Client, bucket: str, path: str = "") -> List[Dict[str, Any]]:
    return client.storage.from_(bucket).list(path or "")


def delete_files(client: Client, bucket: str, paths: Union[str, List[str]]) -> List[Dict[str, Any]]:
    """Delete one object or a list of objects."""
    if isinstance(paths, str):
        paths = [paths]
    return client.storage.from_(bucket).remove(list(paths))


def create_signed_url(
    client: Client,
    bucket: str,
    path: str,
    expires_in: int = DEFAULT_SIGNED_URL_EXPIRY
) -> Dict[str, Any]:
    """Create a signed URL valid for ``expires_in`` seconds."""
    return client.storage.from_(bucket).create_signed_url(path, expires_in)


def move_file(client: Client, bucket: str, from_path: str, to_path: str):
    return client.storage.from_(bucket).move(from_path, to_path)


def copy_file(client: Client, bucket: str, from_path: str, to_path: str):
    return client.storage.from_(bucket).copy(from_path, to_path)
