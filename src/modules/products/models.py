"""Product model keyed by its name.

``name`` is the business identity: lookups, deletes and duplicate
detection all go through it, while ``id`` is the storage key.  The unique
index on ``name`` backs the service-level existence check so that two
concurrent inserts of the same name cannot both succeed.

``created_at`` / ``updated_at`` are stamped by ``ProductConverter`` rather
than by ``auto_now`` so that ``updated_at`` stays empty until the first
update.
"""

from __future__ import annotations

import uuid

from django.db import models


class Product(models.Model):
    """Stored form of a catalog product."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, unique=True)
    category = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    image = models.CharField(max_length=500, null=True, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField(null=True, blank=True, default=None)

    class Meta:
        db_table = "products"
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.name
