# apps/core/models.py

import uuid

from django.db import models


class TimestampedModel(models.Model):
    """Base model carrying creation and modification timestamps"""
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class BaseModel(TimestampedModel):
    """Base model for all storefront tables: UUID primary key plus timestamps"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True
        ordering = ['-created_at']
