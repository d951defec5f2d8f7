# apps/shop/infrastructure/storage.py

"""
Product image storage on top of Django's default storage backend
"""

import logging
import os
import time
import uuid

from django.core.files.storage import default_storage

from ..conf import store_setting
from ..domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE = 10 * 1024 * 1024


def build_image_path(filename: str, clock=time.time) -> str:
    """products/<epoch ms>-<uuid>.<ext>"""
    ext = os.path.splitext(filename or '')[1].lstrip('.').lower() or 'jpg'
    directory = store_setting('PRODUCT_IMAGE_DIR')
    return f"{directory}/{int(clock() * 1000)}-{uuid.uuid4()}.{ext}"


def validate_image(upload):
    content_type = getattr(upload, 'content_type', '') or ''
    if not content_type.startswith('image/'):
        raise ValidationError(f'{upload.name} is not an image', details={'content_type': content_type})
    if upload.size > MAX_IMAGE_SIZE:
        raise ValidationError(f'{upload.name} is too large (max 10MB)', details={'size': upload.size})


def upload_product_image(upload, storage=None) -> str:
    """Save an uploaded image and return its public URL"""
    storage = storage or default_storage
    validate_image(upload)
    path = storage.save(build_image_path(upload.name), upload)
    url = storage.url(path)
    logger.info('Stored product image', extra={'path': path})
    return url
