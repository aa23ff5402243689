"""Image upload helpers shared by profiles and the catalog.

Image fields accept EITHER a multipart upload OR a plain URL string. Uploads
are stored through the default storage under a per-folder random name and
the stored value is always a URL string.
"""

import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from rest_framework import serializers

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp"}
MAX_IMAGE_SIZE = 5 * 1024 * 1024


def _upload_path(folder: str, filename: str) -> str:
    base, ext = os.path.splitext(filename or "")
    ext = (ext or ".jpg").lower()
    return f"{folder}/{uuid.uuid4().hex}{ext}"


def _is_uploaded_file(obj) -> bool:
    return hasattr(obj, "read")


def _abs_url(request, relative_url: str) -> str:
    if not relative_url:
        return ""
    return request.build_absolute_uri(relative_url) if request else relative_url


def save_image_and_get_url(request, file_obj, folder: str) -> str:
    """Store uploaded image and return absolute URL (JPEG/PNG/WEBP, ≤5MB)."""
    ctype = (getattr(file_obj, "content_type", "") or "").lower()
    if ctype not in ALLOWED_IMAGE_TYPES:
        raise serializers.ValidationError(
            {"image": "Unsupported file type. Allowed: JPEG, PNG, WEBP"}
        )
    if getattr(file_obj, "size", 0) > MAX_IMAGE_SIZE:
        raise serializers.ValidationError({"image": "File too large (>5MB)."})

    path = _upload_path(folder, getattr(file_obj, "name", "image"))
    saved_path = default_storage.save(path, file_obj)
    rel = f"{settings.MEDIA_URL}{saved_path}".replace("//", "/")
    return _abs_url(request, rel)


class FileOrURLField(serializers.Field):
    """
    Accepts EITHER an UploadedFile (multipart) OR a string URL (JSON).
    Representation is always a (possibly empty) string.
    """

    def to_internal_value(self, data):
        if _is_uploaded_file(data):                # upload
            return data
        if data in (None, ""):                     # empty/None -> empty string
            return ""
        if isinstance(data, str):                  # URL string
            return data
        raise serializers.ValidationError(
            "image must be an uploaded image or a string URL."
        )

    def to_representation(self, value):
        return value or ""


def resolve_image(request, value, folder: str) -> str:
    """Turn a validated FileOrURLField value into the URL string to persist."""
    if _is_uploaded_file(value):
        return save_image_and_get_url(request, value, folder)
    return value or ""
