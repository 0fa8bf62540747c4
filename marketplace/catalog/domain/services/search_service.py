"""
SearchService - global search across people, listings, posts, shops,
products, employees and services.

Each entity type contributes at most ``PER_TYPE_LIMIT`` results, newest
first where the model has a timestamp, and the groups are concatenated in
a fixed order so the client can render sections without sorting.
"""

import time
from typing import List

from django.contrib.auth import get_user_model
from django.db.models import Q

from activity.models import Post
from marketplace.infra.observability.metrics import global_search_duration, global_search_results, global_searches_total
from marketplace.listings.domain.models import Employee, Listing, Service
from marketplace.shops.domain.models import Product, Shop
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()

MIN_QUERY_LENGTH = 2
PER_TYPE_LIMIT = 5
SUBTITLE_SEPARATOR = " • "


def _contains_any(q: str, *fields) -> Q:
    condition = Q()
    for field in fields:
        condition |= Q(**{f"{field}__icontains": q})
    return condition


def _join(*parts) -> str:
    return SUBTITLE_SEPARATOR.join(str(part) for part in parts if part)


def _result(obj_id, kind: str, title: str, subtitle: str, image, href: str) -> dict:
    return {"id": str(obj_id), "type": kind, "title": title, "subtitle": subtitle, "image": image or None, "href": href}


class SearchService(BaseService):
    @BaseService.log_performance
    def search(self, q: str) -> ServiceResult[List[dict]]:
        query = (q or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            global_searches_total.labels(outcome="too_short").inc()
            return service_ok([])

        start = time.time()
        try:
            results = (
                self._users(query)
                + self._listings(query)
                + self._posts(query)
                + self._shops(query)
                + self._products(query)
                + self._employees(query)
                + self._services(query)
            )
        except Exception as e:
            global_searches_total.labels(outcome="error").inc()
            self.logger.error(f"Global search failed for {query!r}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        global_search_duration.observe(time.time() - start)
        global_search_results.observe(len(results))
        global_searches_total.labels(outcome="success").inc()
        return service_ok(results)

    def _users(self, q: str) -> List[dict]:
        users = User.objects.filter(_contains_any(q, "name", "email", "location")).order_by("-date_joined")
        return [
            _result(
                user.pk,
                "user",
                user.name or user.email or "User",
                user.location or user.email or "",
                user.image,
                f"/profile/{user.pk}",
            )
            for user in users[:PER_TYPE_LIMIT]
        ]

    def _listings(self, q: str) -> List[dict]:
        listings = Listing.objects.filter(
            _contains_any(q, "title", "description", "category", "location", "address", "zip_code")
        ).order_by("-created_at")
        return [
            _result(
                listing.pk,
                "listing",
                listing.title,
                _join(listing.category, listing.location),
                listing.image_src,
                f"/listings/{listing.pk}",
            )
            for listing in listings[:PER_TYPE_LIMIT]
        ]

    def _posts(self, q: str) -> List[dict]:
        posts = Post.objects.filter(_contains_any(q, "content", "category", "tag", "location")).order_by("-created_at")
        return [
            _result(
                post.pk,
                "post",
                (post.content or "")[:80] or "Post",
                _join(post.category, post.media_type),
                post.media_url,
                "/feed",
            )
            for post in posts[:PER_TYPE_LIMIT]
        ]

    def _shops(self, q: str) -> List[dict]:
        shops = Shop.objects.filter(
            _contains_any(q, "name", "description", "category", "location", "address", "zip_code")
        ).order_by("-created_at")
        return [
            _result(shop.pk, "shop", shop.name, _join(shop.category, shop.location), shop.logo, f"/shops/{shop.pk}")
            for shop in shops[:PER_TYPE_LIMIT]
        ]

    def _products(self, q: str) -> List[dict]:
        products = Product.objects.filter(_contains_any(q, "name", "description", "tags")).order_by("-created_at")
        return [
            _result(
                product.pk,
                "product",
                product.name,
                f"${product.price:.2f}" if product.price is not None else "",
                product.main_image,
                f"/shops/{product.shop_id}" if product.shop_id else "/shops",
            )
            for product in products[:PER_TYPE_LIMIT]
        ]

    def _employees(self, q: str) -> List[dict]:
        employees = Employee.objects.filter(_contains_any(q, "full_name", "job_title")).select_related(
            "listing", "user"
        )
        return [
            _result(
                employee.pk,
                "employee",
                employee.full_name,
                _join(employee.job_title, employee.listing.title if employee.listing_id else ""),
                employee.user.image if employee.user_id else None,
                f"/listings/{employee.listing_id}" if employee.listing_id else "/listings",
            )
            for employee in employees[:PER_TYPE_LIMIT]
        ]

    def _services(self, q: str) -> List[dict]:
        services = Service.objects.filter(_contains_any(q, "service_name", "category", "listing__title")).select_related(
            "listing"
        )
        return [
            _result(
                service.pk,
                "service",
                service.service_name,
                _join(
                    service.category,
                    service.listing.title,
                    f"${service.price}" if service.price is not None else "",
                ),
                service.listing.image_src,
                f"/listings/{service.listing_id}" if service.listing_id else "/listings",
            )
            for service in services[:PER_TYPE_LIMIT]
        ]
