# apps/api/izin_api/core/storage.py
from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
import os
from pathlib import Path
import tempfile
import boto3
from botocore.config import Config
import logging
from botocore.exceptions import BotoCoreError, ClientError

from .settings import settings

logger = logging.getLogger("storage")


class StorageError(Exception):
    pass


@dataclass(frozen=True)
class StorageConfig:
    endpoint_url: str
    bucket: str
    public_base_url: str | None

_logged_config = False


def is_object_storage() -> bool:
    return settings.STORAGE_BACKEND == "object"


def get_storage_config() -> StorageConfig:
    global _logged_config
    if not is_object_storage():
        raise RuntimeError("Object storage is not enabled")
    if not all(
        [
            settings.OBJECT_STORAGE_ENDPOINT,
            settings.OBJECT_STORAGE_BUCKET,
        ]
    ):
        raise RuntimeError("Missing object storage configuration")
    cfg = StorageConfig(
        endpoint_url=settings.OBJECT_STORAGE_ENDPOINT or "",
        bucket=(settings.OBJECT_STORAGE_BUCKET or "").strip(),
        public_base_url=settings.OBJECT_STORAGE_PUBLIC_BASE_URL,
    )
    if not _logged_config:
        logger.info(
            "Object storage config loaded: endpoint=%s bucket=%s public_base=%s",
            cfg.endpoint_url,
            cfg.bucket,
            cfg.public_base_url or "",
        )
        _logged_config = True
    return cfg

def get_s3_client():
    cfg = get_storage_config()
    return boto3.client(
        "s3",
        endpoint_url=cfg.endpoint_url,
        config=Config(s3={"addressing_style": "path"}),
    )

def get_public_url(*, key: str) -> str:
    cfg = get_storage_config()
    if cfg.public_base_url:
        return f"{cfg.public_base_url.rstrip('/')}/{key}"
    return f"{cfg.endpoint_url.rstrip('/')}/{cfg.bucket}/{key}"


def local_export_root() -> Path:
    return Path(settings.LOCAL_EXPORT_ROOT)


def local_export_path(file_name: str) -> Path | None:
    """Resolve a file name inside the export root; None if it escapes it."""
    root = local_export_root().resolve()
    path = (root / file_name).resolve()
    if path.parent != root:
        return None
    return path


def _write_local_atomic(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=path.suffix)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        # atomic within one filesystem
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def save_export(*, file_name: str, content: bytes, content_type: str) -> str:
    """Store one export file in full and return the URL it is served from."""
    if is_object_storage():
        key = f"exports/{file_name}"
        try:
            cfg = get_storage_config()
            s3 = get_s3_client()
            s3.upload_fileobj(
                Fileobj=BytesIO(content),
                Bucket=cfg.bucket,
                Key=key,
                ExtraArgs={"ContentType": content_type},
            )
        except (ClientError, BotoCoreError, RuntimeError) as exc:
            logger.exception("Object storage upload failed: %s", key)
            raise StorageError(str(exc)) from exc
        return get_public_url(key=key)

    path = local_export_path(file_name)
    if path is None:
        raise StorageError(f"Invalid export file name: {file_name}")
    try:
        _write_local_atomic(path, content)
    except OSError as exc:
        logger.exception("Local export write failed: %s", path)
        raise StorageError(str(exc)) from exc
    return f"{settings.EXPORT_URL_PREFIX.rstrip('/')}/{file_name}"
