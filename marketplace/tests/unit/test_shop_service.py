import pytest

from marketplace.models import Product, ProductCategory, Shop
from marketplace.shops.domain.services import ShopService
from marketplace.tests.factories import ListingFactory, ProductFactory, ProviderFactory, ShopFactory
from utils.service_base import ErrorCodes


@pytest.fixture
def shop_service():
    return ShopService()


def shop_payload(**overrides):
    payload = {
        "name": "Glow Goods",
        "description": "Skincare essentials",
        "logo": "https://cdn.example.com/logo.png",
        "category": "Beauty",
        "location": "Austin, TX",
        "address": "12 Elm St",
        "zip_code": "73301",
    }
    payload.update(overrides)
    return payload


@pytest.mark.unit
@pytest.mark.django_db
class TestCreateShop:
    def test_physical_shop_requires_address(self, shop_service):
        result = shop_service.create_shop(ProviderFactory(), shop_payload(address=""))

        assert result.ok is False
        assert result.error == ErrorCodes.INVALID_INPUT

    def test_online_shop_gets_online_location(self, shop_service):
        result = shop_service.create_shop(
            ProviderFactory(), shop_payload(is_online_only=True, address="", zip_code="", coordinates={"lat": 1})
        )

        assert result.ok is True
        shop = result.value["shop"]
        assert shop.location == "Online Shop"
        assert shop.coordinates is None

    def test_missing_required_fields(self, shop_service):
        result = shop_service.create_shop(ProviderFactory(), {"name": "Only a name"})

        assert result.error_detail == "Missing required fields: description, logo, category"

    def test_bad_socials_json(self, shop_service):
        result = shop_service.create_shop(ProviderFactory(), shop_payload(socials="{oops"))

        assert result.error == ErrorCodes.INVALID_INPUT

    def test_batch_products_are_best_effort(self, shop_service):
        products = [
            {"name": "Serum", "description": "Vitamin C", "price": "24.50", "images": ["https://cdn/s.jpg"],
             "sizes": ["S", "M"], "category": "Skincare"},
            {"name": "No price", "description": "Missing price", "images": ["https://cdn/x.jpg"]},
            {"name": "No image", "description": "Missing image", "price": 5},
            {"name": "Bad price", "description": "Not a number", "price": "abc", "image": "https://cdn/b.jpg"},
            {"name": "Toner", "description": "Daily", "price": 12, "image": "https://cdn/t.jpg"},
        ]

        result = shop_service.create_shop(ProviderFactory(), shop_payload(products=products))

        assert result.ok is True
        assert result.value["skipped"] == 3
        created = result.value["products"]
        assert [product.name for product in created] == ["Serum", "Toner"]

        serum = created[0]
        assert serum.options == [{"name": "Size", "values": ["S", "M"]}]
        assert serum.variants[0] == {"price": 24.5, "inventory": 10, "optionValues": {"Size": "S"}}
        assert serum.tags == ["Skincare"]
        assert serum.is_featured is True
        assert serum.inventory == 10

        toner = created[1]
        assert toner.category.name == "Uncategorized"
        assert ProductCategory.objects.get(name="Uncategorized").description == (
            "Default category for Uncategorized products"
        )

        shop = Shop.objects.get(pk=result.value["shop"].pk)
        assert shop.featured_products == [str(product.pk) for product in created]

    def test_listing_must_belong_to_owner(self, shop_service):
        result = shop_service.create_shop(ProviderFactory(), shop_payload(listing_id=str(ListingFactory().pk)))

        assert result.error == ErrorCodes.LISTING_NOT_FOUND


@pytest.mark.unit
@pytest.mark.django_db
class TestListShops:
    def test_has_products_and_limit(self, shop_service):
        stocked = ShopFactory()
        ProductFactory(shop=stocked)
        ProductFactory(shop=stocked)
        ShopFactory()

        result = shop_service.list_shops({"has_products": "true"})
        assert [shop.pk for shop in result.value] == [stocked.pk]

        assert len(shop_service.list_shops({"limit": "1"}).value) == 1
        assert shop_service.list_shops({"limit": "-3"}).value == []

    def test_city_filter_is_case_insensitive(self, shop_service):
        austin = ShopFactory(location="Austin, TX")
        ShopFactory(location="Boston, MA")

        result = shop_service.list_shops({"city": "austin"})

        assert [shop.pk for shop in result.value] == [austin.pk]

    def test_verified_filter(self, shop_service):
        verified = ShopFactory(is_verified=True)
        ShopFactory(is_verified=False)

        result = shop_service.list_shops({"is_verified": "true"})

        assert [shop.pk for shop in result.value] == [verified.pk]

    def test_delete_removes_products(self, shop_service):
        product = ProductFactory()

        result = shop_service.delete_shop(product.shop.owner, product.shop.pk)

        assert result.ok is True
        assert not Product.objects.filter(pk=product.pk).exists()
