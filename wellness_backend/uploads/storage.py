"""Local file storage for uploads.

Files live under ``MEDIA_ROOT/<directory>/`` and are referenced in the
database by their public path, e.g. ``/uploads/services/1712-48213-spa.jpg``.
Images are re-encoded with Pillow to fit inside IMAGE_MAX_DIMENSION.
"""

from __future__ import annotations

import logging
import mimetypes
import os
import re
import secrets
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone as dt_timezone
from pathlib import Path
from typing import Optional

from django.conf import settings

from PIL import Image, ImageOps, UnidentifiedImageError

from wellness_backend.core.exceptions import UploadRejected

logger = logging.getLogger(__name__)


IMAGE_TYPES = {
    'image/jpeg',
    'image/jpg',
    'image/png',
    'image/gif',
    'image/webp',
}
DOCUMENT_TYPES = {
    'application/pdf',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
}
ALLOWED_TYPES = IMAGE_TYPES | DOCUMENT_TYPES

UPLOAD_DIRECTORIES = (
    'images',
    'documents',
    'practitioners',
    'services',
    'programs',
    'testimonials',
    'misc',
)

_UNSAFE_CHARS = re.compile(r'[^a-zA-Z0-9.\-]')


@dataclass
class StoredFile:
    filename: str
    original_name: str
    mimetype: str
    size: int
    path: str
    url: str

    def to_dict(self) -> dict:
        return asdict(self)


def upload_root() -> Path:
    return Path(settings.MEDIA_ROOT)


def public_path(directory: str, filename: str) -> str:
    return f"{settings.MEDIA_URL.rstrip('/')}/{directory}/{filename}"


def content_type_of(upload) -> str:
    content_type = (getattr(upload, 'content_type', None) or '').split(';')[0].strip().lower()
    if not content_type:
        content_type = mimetypes.guess_type(upload.name)[0] or 'application/octet-stream'
    return content_type


def directory_for(content_type: str) -> str:
    """images/, documents/ or misc/ for a generic upload."""
    if content_type in IMAGE_TYPES:
        return 'images'
    if content_type in DOCUMENT_TYPES:
        return 'documents'
    return 'misc'


def sanitize_filename(name: str) -> str:
    return _UNSAFE_CHARS.sub('_', os.path.basename(name or 'file'))


def unique_filename(original_name: str) -> str:
    prefix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
    return f"{prefix}-{sanitize_filename(original_name)}"


def validate_upload(upload, *, allowed_types=ALLOWED_TYPES, max_bytes=None, field='file') -> str:
    """Checks type and size; returns the content type or raises UploadRejected."""
    max_bytes = max_bytes or settings.UPLOAD_MAX_BYTES
    content_type = content_type_of(upload)
    if content_type not in allowed_types:
        if allowed_types == IMAGE_TYPES:
            message = 'Only image files are allowed.'
        else:
            message = f'File type {content_type} is not allowed.'
        raise UploadRejected(message, field=field)
    if upload.size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise UploadRejected(f'File too large. Maximum size is {limit_mb}MB.', field=field, too_large=True)
    return content_type


def save_upload(upload, directory: Optional[str] = None, *, optimize: bool = True) -> StoredFile:
    """Write ``upload`` to disk and return its description.

    ``directory`` defaults to images/documents/misc by content type.
    """
    content_type = content_type_of(upload)
    directory = directory or directory_for(content_type)
    if directory not in UPLOAD_DIRECTORIES:
        raise UploadRejected(f'Invalid upload directory: {directory}')

    target_dir = upload_root() / directory
    target_dir.mkdir(parents=True, exist_ok=True)
    filename = unique_filename(upload.name)
    target = target_dir / filename

    with open(target, 'wb') as fh:
        for chunk in upload.chunks():
            fh.write(chunk)

    if optimize and content_type in IMAGE_TYPES:
        optimize_image(target)

    stored = StoredFile(
        filename=filename,
        original_name=upload.name,
        mimetype=content_type,
        size=target.stat().st_size,
        path=public_path(directory, filename),
        url=public_path(directory, filename),
    )
    logger.info('Stored upload %s (%s, %s bytes)', stored.path, content_type, stored.size)
    return stored


def optimize_image(path: Path) -> bool:
    """Shrink to fit IMAGE_MAX_DIMENSION (never enlarges). Keeps the original on failure."""
    max_dim = getattr(settings, 'IMAGE_MAX_DIMENSION', 1200)
    quality = getattr(settings, 'IMAGE_QUALITY', 85)
    try:
        with Image.open(path) as opened:
            if getattr(opened, 'is_animated', False):
                return False
            image_format = opened.format
            image = ImageOps.exif_transpose(opened)
            image.load()
        if image.width <= max_dim and image.height <= max_dim:
            return False
        image.thumbnail((max_dim, max_dim))
        if image_format == 'JPEG' and image.mode not in ('RGB', 'L'):
            image = image.convert('RGB')
        save_kwargs = {'optimize': True}
        if image_format in ('JPEG', 'WEBP'):
            save_kwargs['quality'] = quality
        image.save(path, format=image_format, **save_kwargs)
        return True
    except (UnidentifiedImageError, OSError) as exc:
        logger.warning('Image optimization failed for %s: %s', path, exc)
        return False


def resolve_public_path(path: str) -> Optional[Path]:
    """Filesystem path for a stored public path; None if it escapes MEDIA_ROOT."""
    if not path:
        return None
    prefix = settings.MEDIA_URL.rstrip('/') + '/'
    relative = path[len(prefix):] if path.startswith(prefix) else path.lstrip('/')
    root = upload_root().resolve()
    candidate = (root / relative).resolve()
    if root not in candidate.parents:
        return None
    return candidate


def delete_upload(path: Optional[str]) -> bool:
    """Remove a stored file by public path. Missing files are not an error."""
    target = resolve_public_path(path or '')
    if target is None or not target.exists():
        return False
    try:
        target.unlink()
    except OSError:
        logger.exception('Could not delete upload %s', path)
        return False
    logger.info('Deleted upload %s', path)
    return True


def find_upload(filename: str) -> Optional[tuple[str, Path]]:
    """Search every upload directory for ``filename`` (basename only)."""
    safe_name = os.path.basename(filename)
    for directory in UPLOAD_DIRECTORIES:
        candidate = upload_root() / directory / safe_name
        if candidate.is_file():
            return directory, candidate
    return None


def describe(directory: str, path: Path) -> dict:
    stat = path.stat()
    return {
        'filename': path.name,
        'directory': directory,
        'size': stat.st_size,
        'mimetype': mimetypes.guess_type(path.name)[0] or 'application/octet-stream',
        'file_type': file_type(path.name),
        'created': datetime.fromtimestamp(stat.st_ctime, tz=dt_timezone.utc).isoformat(),
        'modified': datetime.fromtimestamp(stat.st_mtime, tz=dt_timezone.utc).isoformat(),
        'url': public_path(directory, path.name),
    }


def file_type(filename: str) -> str:
    ext = os.path.splitext(filename)[1].lower()
    if ext in ('.jpg', '.jpeg', '.png', '.gif', '.webp'):
        return 'image'
    if ext in ('.pdf', '.doc', '.docx'):
        return 'document'
    return 'other'


def list_directory(directory: str) -> list[dict]:
    """Files in one upload directory, newest first."""
    target = upload_root() / directory
    if not target.is_dir():
        return []
    files = [describe(directory, p) for p in target.iterdir() if p.is_file()]
    files.sort(key=lambda item: item['modified'], reverse=True)
    return files
