"""
IndependentWorkerService - the service menu of a solo worker.

An independent worker is an Employee flagged ``is_independent`` on the
listing they run alone. Saving their menu upserts the listing's services,
assigns exactly those services to the worker and deletes the rest of the
listing's services.
"""

import math
from typing import List

from django.core.exceptions import ValidationError
from django.db import transaction

from marketplace.listings.domain.models import Employee, Service
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


def _clean_service(item) -> dict:
    """Return normalized service fields, or None when the item is incomplete."""
    if not isinstance(item, dict):
        return None
    name = str(item.get("service_name") or "").strip()
    category = str(item.get("category") or "").strip()
    try:
        price = float(item.get("price"))
    except (TypeError, ValueError):
        return None
    if not name or not category or not math.isfinite(price) or price <= 0:
        return None
    return {"service_name": name, "category": category, "price": round(price)}


class IndependentWorkerService(BaseService):
    @staticmethod
    def _employee_for(user_id):
        return (
            Employee.objects.select_related("listing")
            .filter(user_id=user_id, is_independent=True)
            .order_by("created_at")
            .first()
        )

    @BaseService.log_performance
    def list_services(self, user_id) -> ServiceResult[List[Service]]:
        """Services assigned to the user's independent employee record; empty when there is none."""
        if not user_id:
            return service_err(ErrorCodes.INVALID_INPUT, "user_id is required")
        try:
            employee = self._employee_for(user_id)
        except ValidationError:
            return service_err(ErrorCodes.INVALID_INPUT, "user_id must be a UUID")
        if employee is None:
            return service_ok([])
        return service_ok(list(employee.services.order_by("created_at")))

    @BaseService.log_performance
    def replace_services(self, user, services) -> ServiceResult[List[Service]]:
        """
        Save the caller's service menu.

        Items need a service_name, a category and a positive price; invalid
        items are dropped. Items whose ``id`` names a service of the listing
        update it, the others are created.

        Returns:
            ServiceResult with every service now on the listing
        """
        if not isinstance(services, list):
            return service_err(ErrorCodes.INVALID_INPUT, "Services array required")

        employee = self._employee_for(user.pk)
        if employee is None:
            return service_err(ErrorCodes.NOT_FOUND, "Employee record not found")

        cleaned = []
        for item in services:
            fields = _clean_service(item)
            if fields:
                cleaned.append((item.get("id"), fields))

        with transaction.atomic():
            existing = {str(service.pk): service for service in Service.objects.filter(listing=employee.listing)}
            kept = []
            for service_id, fields in cleaned:
                service = existing.get(str(service_id)) if service_id else None
                if service is None:
                    service = Service.objects.create(listing=employee.listing, **fields)
                else:
                    for field, value in fields.items():
                        setattr(service, field, value)
                    service.save(update_fields=list(fields))
                kept.append(service)

            employee.services.set(kept)
            dropped = [pk for pk in existing if pk not in {str(service.pk) for service in kept}]
            if dropped:
                Service.objects.filter(listing=employee.listing, pk__in=dropped).delete()

        self.logger.info(
            f"Worker {user.pk} saved {len(kept)} services on listing {employee.listing_id}, "
            f"dropped {len(dropped)}, skipped {len(services) - len(cleaned)} invalid"
        )
        return service_ok(list(Service.objects.filter(listing=employee.listing).order_by("created_at")))
