import logging
import os

from django.core.files.storage import default_storage
from django.utils import timezone

logger = logging.getLogger(__name__)


def store_upload(upload, folder: str, prefix: str) -> str:
    """Save ``upload`` through the default storage and return its public path."""
    extension = os.path.splitext(upload.name)[1].lower() or ".png"
    stamp = int(timezone.now().timestamp() * 1000)
    name = default_storage.save(f"{folder}/{prefix}_{stamp}{extension}", upload)
    logger.info(f"Stored upload {upload.name} as {name}")
    return default_storage.url(name)
