"""
ListingService - business/service listings.

Handles the filtered feed of listings (category, location, owner and a
price window over the listing's services), listing detail, gallery edits
and the multi-step create and update flows that write a listing together
with its services, store hours and employees in one transaction.
"""

from typing import List, Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Max, Min, QuerySet

from marketplace.listings.domain.models import Employee, Listing, Service, StoreHour
from utils.lookups import get_or_none, missing_fields, parse_json_value
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()

REQUIRED_LISTING_FIELDS = (
    "title",
    "description",
    "image_src",
    "category",
    "location",
    "services",
    "address",
    "zip_code",
    "store_hours",
    "gallery_images",
)

EDITABLE_LISTING_FIELDS = (
    "title",
    "description",
    "image_src",
    "category",
    "location",
    "address",
    "zip_code",
    "phone_number",
    "website",
)
NON_BLANK_LISTING_FIELDS = ("title", "description", "image_src", "category")

UNNAMED_EMPLOYEE = "Unnamed User"


def _parse_price_bound(value) -> Optional[int]:
    if value in (None, ""):
        return None
    return int(float(value))


class ListingService(BaseService):
    def base_queryset(self) -> QuerySet:
        return Listing.objects.select_related("owner").prefetch_related(
            "services",
            "store_hours",
            "employees__services",
            "employees__user",
            "owner__favorite_listings",
        )

    @BaseService.log_performance
    def list_listings(self, params: dict = None) -> ServiceResult[List[Listing]]:
        """
        Filtered listing feed.

        Args:
            params: user_id, category, location_value, state, city,
                    min_price, max_price, order ("asc" | "desc")

        Returns:
            ServiceResult with a list of Listing instances
        """
        params = params or {}

        try:
            min_price = _parse_price_bound(params.get("min_price"))
            max_price = _parse_price_bound(params.get("max_price"))
        except (TypeError, ValueError, OverflowError):
            return service_err(ErrorCodes.INVALID_INPUT, "min_price and max_price must be numbers")

        order = (params.get("order") or "desc").lower()
        if order not in ("asc", "desc"):
            return service_err(ErrorCodes.INVALID_INPUT, "order must be 'asc' or 'desc'")

        try:
            queryset = self.base_queryset()

            if params.get("user_id"):
                queryset = queryset.filter(owner_id=params["user_id"])
            if params.get("category"):
                queryset = queryset.filter(category=params["category"])

            # state/city is a fuzzy match and wins over the exact location value
            location_filter = params.get("state") or params.get("city")
            if location_filter:
                queryset = queryset.filter(location__icontains=location_filter)
            elif params.get("location_value"):
                queryset = queryset.filter(location=params["location_value"])

            # A listing matches when its price range overlaps [min_price, max_price]
            if min_price is not None or max_price is not None:
                queryset = queryset.annotate(
                    min_service_price=Min("services__price"), max_service_price=Max("services__price")
                )
                if min_price is not None:
                    queryset = queryset.filter(max_service_price__gte=min_price)
                if max_price is not None:
                    queryset = queryset.filter(min_service_price__lte=max_price)

            queryset = queryset.order_by("created_at" if order == "asc" else "-created_at")
            listings = list(queryset)

            self.logger.debug(f"Listing query matched {len(listings)} rows for params {params}")
            return service_ok(listings)

        except ValidationError as e:
            return service_err(ErrorCodes.INVALID_INPUT, "; ".join(e.messages))
        except Exception as e:
            self.logger.error(f"Error listing listings: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_listing(self, listing_id) -> ServiceResult[Listing]:
        listing = get_or_none(self.base_queryset(), pk=listing_id)
        if listing is None:
            return service_err(ErrorCodes.LISTING_NOT_FOUND, "Listing not found")
        return service_ok(listing)

    @BaseService.log_performance
    def create_listing(self, owner, data: dict) -> ServiceResult[Listing]:
        """
        Create a listing with its services, store hours and employees.

        ``services`` and ``store_hours`` may be JSON strings. Each employee is
        ``{"user_id", "job_title", "service_ids"}`` where service_ids are
        indexes into ``services`` or service names.
        """
        missing = missing_fields(data, REQUIRED_LISTING_FIELDS)
        if missing:
            return service_err(ErrorCodes.INVALID_INPUT, f"Missing required fields: {', '.join(missing)}")

        nested, error = self._parse_nested(data)
        if error:
            return error

        try:
            with transaction.atomic():
                listing = Listing.objects.create(
                    owner=owner,
                    title=data["title"],
                    description=data["description"],
                    image_src=data["image_src"],
                    category=data["category"],
                    location=data["location"],
                    address=data["address"],
                    zip_code=data["zip_code"],
                    phone_number=data.get("phone_number") or "",
                    website=data.get("website") or "",
                    gallery_images=nested["gallery_images"] or [],
                )

                services = [Service.objects.create(listing=listing, **fields) for _, fields in nested["services"]]
                self._replace_store_hours(listing, nested["store_hours"])

                for employee_data in nested["employees"]:
                    user = nested["employee_users"][employee_data["user_id"]]
                    employee = Employee.objects.create(
                        listing=listing,
                        user=user,
                        full_name=user.name or UNNAMED_EMPLOYEE,
                        job_title=employee_data.get("job_title") or "",
                    )
                    assigned = self._resolve_services(services, employee_data.get("service_ids") or [])
                    if assigned:
                        employee.services.set(assigned)

            self.logger.info(
                f"Created listing {listing.pk} with {len(services)} services "
                f"and {len(nested['employees'])} employees"
            )
            return self.get_listing(listing.pk)

        except Exception as e:
            self.logger.error(f"Error creating listing: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def update_listing(self, user, listing_id, data: dict) -> ServiceResult[Listing]:
        """
        Replace a listing's editable state in one transaction.

        Top-level fields are only touched when present. Services are upserted
        by ``id`` and never deleted, since reservations point at them.
        Employees are upserted by user; when ``employees`` is sent, employees
        left out of it are removed unless they have reservations. Store hours
        are replaced when ``store_hours`` is sent.
        """
        listing = get_or_none(Listing, pk=listing_id)
        if listing is None:
            return service_err(ErrorCodes.LISTING_NOT_FOUND, "Listing not found")
        if listing.owner_id != user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only edit your own listings")

        blanked = [field for field in NON_BLANK_LISTING_FIELDS if field in data and data[field] in (None, "")]
        if blanked:
            return service_err(ErrorCodes.INVALID_INPUT, f"Fields cannot be empty: {', '.join(blanked)}")

        nested, error = self._parse_nested(data)
        if error:
            return error

        try:
            with transaction.atomic():
                listing = Listing.objects.select_for_update().get(pk=listing.pk)

                changed = [field for field in EDITABLE_LISTING_FIELDS if field in data]
                for field in changed:
                    setattr(listing, field, data[field] or "")
                if nested["gallery_images"] is not None:
                    listing.gallery_images = nested["gallery_images"]
                    changed.append("gallery_images")
                listing.save(update_fields=changed + ["updated_at"])

                existing_services = {str(service.pk): service for service in listing.services.all()}
                incoming = []
                for service_id, fields in nested["services"]:
                    service = existing_services.get(str(service_id)) if service_id else None
                    if service is None:
                        service = Service.objects.create(listing=listing, **fields)
                    else:
                        for field, value in fields.items():
                            setattr(service, field, value)
                        service.save(update_fields=list(fields))
                    incoming.append(service)
                incoming_ids = {service.pk for service in incoming}
                assignable = incoming + [s for s in existing_services.values() if s.pk not in incoming_ids]

                existing_employees = {str(e.user_id): e for e in listing.employees.all()}
                for employee_data in nested["employees"]:
                    employee_user = nested["employee_users"][employee_data["user_id"]]
                    employee = existing_employees.get(str(employee_user.pk))
                    if employee is None:
                        employee = Employee(listing=listing, user=employee_user)
                    employee.full_name = employee_user.name or UNNAMED_EMPLOYEE
                    employee.job_title = employee_data.get("job_title") or ""
                    employee.is_active = True
                    employee.save()
                    existing_employees[str(employee_user.pk)] = employee
                    employee.services.set(self._resolve_services(assignable, employee_data.get("service_ids") or []))

                removed = 0
                if "employees" in data:
                    kept_users = set(nested["employee_users"])
                    removed, _ = (
                        listing.employees.exclude(user_id__in=kept_users).filter(reservations__isnull=True).delete()
                    )

                if "store_hours" in data:
                    self._replace_store_hours(listing, nested["store_hours"])

            self.logger.info(
                f"Updated listing {listing.pk}: {len(incoming)} services upserted, "
                f"{len(nested['employees'])} employees kept, {removed} rows removed"
            )
            return self.get_listing(listing.pk)

        except Exception as e:
            self.logger.error(f"Error updating listing {listing_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def update_gallery(self, user, listing_id, action: str, image=None, image_index=None) -> ServiceResult[Listing]:
        """Append (``addImage``) or drop by position (``removeImage``) a gallery image."""
        listing = get_or_none(Listing, pk=listing_id)
        if listing is None:
            return service_err(ErrorCodes.LISTING_NOT_FOUND, "Listing not found")
        if listing.owner_id != user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only edit your own listings")

        images = list(listing.gallery_images or [])
        if action == "addImage":
            if not image:
                return service_err(ErrorCodes.INVALID_INPUT, "Image URL is required")
            images.append(image)
        elif action == "removeImage":
            if image_index in (None, ""):
                return service_err(ErrorCodes.INVALID_INPUT, "Image index is required")
            try:
                image_index = int(image_index)
            except (TypeError, ValueError):
                return service_err(ErrorCodes.INVALID_INPUT, "Image index must be an integer")
            images = [item for index, item in enumerate(images) if index != image_index]
        else:
            return service_err(ErrorCodes.INVALID_INPUT, "Invalid action")

        listing.gallery_images = images
        listing.save(update_fields=["gallery_images", "updated_at"])
        return self.get_listing(listing.pk)

    @BaseService.log_performance
    def delete_listing(self, user, listing_id) -> ServiceResult[bool]:
        listing = get_or_none(Listing, pk=listing_id)
        if listing is None:
            return service_err(ErrorCodes.LISTING_NOT_FOUND, "Listing not found")
        if listing.owner_id != user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only delete your own listings")

        listing.delete()
        self.logger.info(f"Deleted listing {listing_id}")
        return service_ok(True)

    def _parse_nested(self, data: dict):
        """
        Decode the nested parts of a listing payload.

        Returns:
            (parsed, None) on success or (None, error ServiceResult). ``services``
            is a list of ``(id or None, fields)`` and ``employee_users`` maps
            user id strings to users. ``gallery_images`` is None when absent.
        """
        try:
            services_data = parse_json_value(data.get("services"), [])
            store_hours_data = parse_json_value(data.get("store_hours"), [])
            employees_data = parse_json_value(data.get("employees"), [])
            gallery_images = parse_json_value(data.get("gallery_images"), None)
        except ValueError:
            return None, service_err(
                ErrorCodes.INVALID_INPUT, "Invalid JSON in services, store_hours, employees or gallery"
            )

        if not isinstance(services_data, list) or not isinstance(store_hours_data, list):
            return None, service_err(ErrorCodes.INVALID_INPUT, "services and store_hours must be arrays")
        if not isinstance(employees_data, list):
            return None, service_err(ErrorCodes.INVALID_INPUT, "Employees must be an array")
        if gallery_images is not None and not isinstance(gallery_images, list):
            return None, service_err(ErrorCodes.INVALID_INPUT, "gallery_images must be an array")

        for employee in employees_data:
            if not isinstance(employee, dict) or not isinstance(employee.get("user_id"), str):
                return None, service_err(ErrorCodes.INVALID_INPUT, "Each employee must have a user_id string")

        employee_users = {}
        if employees_data:
            wanted = {employee["user_id"] for employee in employees_data}
            try:
                employee_users = {str(user.pk): user for user in User.objects.filter(pk__in=wanted)}
            except ValidationError:
                employee_users = {}
            not_found = sorted(wanted - set(employee_users))
            if not_found:
                return None, service_err(ErrorCodes.INVALID_INPUT, f"Users not found: {', '.join(not_found)}")

        try:
            services = [
                (
                    item.get("id"),
                    {
                        "service_name": item["service_name"],
                        "price": round(float(item["price"])),
                        "category": item.get("category") or "",
                    },
                )
                for item in services_data
            ]
        except (AttributeError, KeyError, TypeError, ValueError, OverflowError):
            return None, service_err(
                ErrorCodes.INVALID_INPUT, "Each service needs a service_name and a numeric price"
            )

        return {
            "services": services,
            "store_hours": store_hours_data,
            "employees": employees_data,
            "employee_users": employee_users,
            "gallery_images": gallery_images,
        }, None

    @staticmethod
    def _replace_store_hours(listing: Listing, hours):
        listing.store_hours.all().delete()
        StoreHour.objects.bulk_create(
            [
                StoreHour(
                    listing=listing,
                    day_of_week=hour.get("day_of_week", ""),
                    open_time=hour.get("open_time") or "",
                    close_time=hour.get("close_time") or "",
                    is_closed=bool(hour.get("is_closed", False)),
                )
                for hour in hours
            ]
        )

    @staticmethod
    def _resolve_services(services: List[Service], refs) -> List[Service]:
        """Match each ref to a service by list index, service id or service name."""
        by_id = {str(service.pk): service for service in services}
        by_name = {service.service_name: service for service in services}
        resolved = []
        for ref in refs:
            if isinstance(ref, int) or (isinstance(ref, str) and ref.isdigit()):
                index = int(ref)
                if 0 <= index < len(services):
                    resolved.append(services[index])
            elif str(ref) in by_id:
                resolved.append(by_id[str(ref)])
            elif ref in by_name:
                resolved.append(by_name[ref])
        return resolved
