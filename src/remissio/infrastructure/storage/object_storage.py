"""
infrastructure.storage.object_storage - Bucket/path file references.

Local storage has nothing to sign, so a signed URL is the path itself.
Kept behind the same Result interface so meal images can later point at
a real bucket without touching callers.
"""

from __future__ import annotations

import logging

from remissio.domain.exceptions import ValidationError
from remissio.domain.models import Result

logger = logging.getLogger(__name__)


class ObjectStorage:
    """Signed-URL provider for stored files."""

    def create_signed_url(self, bucket: str, path: str, expires_in: int = 3600) -> Result[dict]:
        if not path:
            return Result.failure(ValidationError("A file path is required."))
        if expires_in <= 0:
            return Result.failure(ValidationError("expires_in must be positive."))
        logger.debug("Signed URL for %s/%s (expires in %ds)", bucket, path, expires_in)
        return Result.success({"signed_url": path})
