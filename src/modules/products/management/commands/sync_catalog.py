from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from modules.products.factories import build_catalog_sync_service
from shared.domain.exceptions import ConflictError, InfrastructureError


class Command(BaseCommand):
    help = "Import products from the external catalog into the local store."

    def handle(self, *args, **options):
        self.stdout.write("Synchronizing catalog...")
        try:
            products = build_catalog_sync_service().synchronize()
        except (ConflictError, InfrastructureError) as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(
            self.style.SUCCESS(f"Catalog synchronized: products={len(products)}")
        )
