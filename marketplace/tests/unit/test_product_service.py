import uuid
from decimal import Decimal

import pytest

from marketplace.shops.domain.services import PriceError, ProductService, parse_price
from marketplace.tests.factories import ProductCategoryFactory, ProductFactory, ShopFactory, UserFactory
from utils.service_base import ErrorCodes


@pytest.fixture
def product_service():
    return ProductService()


@pytest.mark.unit
class TestParsePrice:
    def test_parses_strings_and_numbers(self):
        assert parse_price("12.5") == Decimal("12.50")
        assert parse_price(3) == Decimal("3.00")
        assert parse_price("") is None

    def test_rejects_negative_and_garbage(self):
        with pytest.raises(PriceError):
            parse_price("-1")
        with pytest.raises(PriceError):
            parse_price("ten")


@pytest.mark.unit
@pytest.mark.django_db
class TestCreateProduct:
    def setup_method(self):
        self.payload = {"name": "Mug", "description": "Ceramic", "price": "9.99", "main_image": "https://cdn/m.jpg"}

    def test_owner_creates_product_with_defaults(self, product_service):
        shop = ShopFactory()
        category = ProductCategoryFactory()

        result = product_service.create_product(
            shop.owner,
            {**self.payload, "shop_id": str(shop.pk), "category_id": str(category.pk), "options": '[{"name": "Color"}]'},
        )

        assert result.ok is True
        product = result.value
        assert product.price == Decimal("9.99")
        assert product.is_published is True
        assert product.is_featured is False
        assert product.inventory == 0
        assert product.low_stock_threshold == 5
        assert product.options == [{"name": "Color"}]

    def test_non_owner_is_forbidden(self, product_service):
        shop = ShopFactory()
        category = ProductCategoryFactory()

        result = product_service.create_product(
            UserFactory(), {**self.payload, "shop_id": str(shop.pk), "category_id": str(category.pk)}
        )

        assert result.error == ErrorCodes.PERMISSION_DENIED

    def test_unknown_shop_and_category(self, product_service):
        shop = ShopFactory()

        no_shop = product_service.create_product(
            shop.owner, {**self.payload, "shop_id": str(uuid.uuid4()), "category_id": str(uuid.uuid4())}
        )
        no_category = product_service.create_product(
            shop.owner, {**self.payload, "shop_id": str(shop.pk), "category_id": str(uuid.uuid4())}
        )

        assert no_shop.error == ErrorCodes.SHOP_NOT_FOUND
        assert no_category.error == ErrorCodes.CATEGORY_NOT_FOUND

    def test_negative_price_is_rejected(self, product_service):
        shop = ShopFactory()
        category = ProductCategoryFactory()

        result = product_service.create_product(
            shop.owner, {**self.payload, "price": "-2", "shop_id": str(shop.pk), "category_id": str(category.pk)}
        )

        assert result.error == ErrorCodes.INVALID_INPUT


@pytest.mark.unit
@pytest.mark.django_db
class TestListAndUpdateProducts:
    def test_published_only_by_default(self, product_service):
        published = ProductFactory(is_published=True)
        ProductFactory(is_published=False)

        result = product_service.list_products({})

        assert [product.pk for product in result.value] == [published.pk]

    def test_filters_by_shop_and_featured(self, product_service):
        shop = ShopFactory()
        featured = ProductFactory(shop=shop, is_featured=True)
        ProductFactory(shop=shop, is_featured=False)
        ProductFactory(is_featured=True)

        result = product_service.list_products({"shop_id": str(shop.pk), "featured": "true"})

        assert [product.pk for product in result.value] == [featured.pk]

    def test_invalid_filter_value(self, product_service):
        result = product_service.list_products({"shop_id": "not-a-uuid"})

        assert result.error == ErrorCodes.INVALID_INPUT

    def test_update_changes_whitelisted_fields_only(self, product_service):
        product = ProductFactory(name="Old", price=Decimal("5.00"))

        result = product_service.update_product(
            product.shop.owner, product.pk, {"name": "New", "price": "7.25", "shop_id": str(uuid.uuid4())}
        )

        assert result.ok is True
        product.refresh_from_db()
        assert product.name == "New"
        assert product.price == Decimal("7.25")

    def test_update_by_stranger_is_forbidden(self, product_service):
        product = ProductFactory()

        result = product_service.update_product(UserFactory(), product.pk, {"name": "Hijacked"})

        assert result.error == ErrorCodes.PERMISSION_DENIED
