"""
FavoriteService - the user's saved listings, shops, products and employees.

Every favoritable model carries a ``favorited_by`` relation; toggling flips
the user's membership in it.
"""

from django.db.models import QuerySet

from marketplace.listings.domain.models import Employee, Listing
from marketplace.shops.domain.models import Product, Shop
from utils.lookups import get_or_none
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

FAVORITE_MODELS = {
    "listing": (Listing, ErrorCodes.LISTING_NOT_FOUND),
    "shop": (Shop, ErrorCodes.SHOP_NOT_FOUND),
    "product": (Product, ErrorCodes.PRODUCT_NOT_FOUND),
    "employee": (Employee, ErrorCodes.NOT_FOUND),
}

RELATED = {
    "listing": ("owner",),
    "shop": ("owner",),
    "product": ("shop", "category"),
    "employee": ("listing", "user"),
}


class FavoriteService(BaseService):
    @BaseService.log_performance
    def toggle(self, user, kind: str, target_id) -> ServiceResult[dict]:
        if kind not in FAVORITE_MODELS:
            return service_err(ErrorCodes.INVALID_INPUT, f"Invalid favorite type '{kind}'")

        model, not_found = FAVORITE_MODELS[kind]
        target = get_or_none(model, pk=target_id)
        if target is None:
            return service_err(not_found, f"{kind.capitalize()} not found")

        try:
            favorited = not target.favorited_by.filter(pk=user.pk).exists()
            if favorited:
                target.favorited_by.add(user)
            else:
                target.favorited_by.remove(user)

            self.logger.info(f"User {user.pk} {'saved' if favorited else 'removed'} {kind} {target.pk}")
            return service_ok({"favorited": favorited, "kind": kind, "target_id": str(target.pk)})
        except Exception as e:
            self.logger.error(f"Error toggling favorite {kind} {target_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def list(self, user, kind: str) -> ServiceResult[QuerySet]:
        if kind not in FAVORITE_MODELS:
            return service_err(ErrorCodes.INVALID_INPUT, f"Invalid favorite type '{kind}'")

        model, _ = FAVORITE_MODELS[kind]
        queryset = model.objects.filter(favorited_by=user).select_related(*RELATED[kind]).order_by("-created_at")
        return service_ok(queryset)

    def favorite_ids(self, user, kind: str) -> list:
        """Ids of the user's favorites of one kind, for ``is_favorite`` flags."""
        if not getattr(user, "is_authenticated", False) or kind not in FAVORITE_MODELS:
            return []
        model, _ = FAVORITE_MODELS[kind]
        return [str(pk) for pk in model.objects.filter(favorited_by=user).values_list("pk", flat=True)]
