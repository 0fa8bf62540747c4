from unittest.mock import patch

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Review
from marketplace.tests.factories import ListingFactory, ProductFactory, ProviderFactory, ReviewFactory, UserFactory
from utils.service_base import ErrorCodes, service_err


class ReviewViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.listing = ListingFactory()
        self.author = UserFactory()
        self.list_url = reverse("marketplace:review-list")

    def test_list_returns_stats(self):
        ReviewFactory(target_listing=self.listing, rating=5)
        ReviewFactory(target_listing=self.listing, rating=3)

        response = self.client.get(
            self.list_url, {"target_type": "listing", "target_listing_id": str(self.listing.pk)}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_count"], 2)
        self.assertEqual(response.data["average_rating"], 4.0)
        self.assertEqual(len(response.data["rating_distribution"]), 5)
        self.assertFalse(response.data["reviews"][0]["is_verified_booking"])

    def test_list_rejects_bad_target(self):
        response = self.client.get(self.list_url, {"target_type": "listing", "target_listing_id": "nope"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_review(self):
        self.client.force_authenticate(user=self.author)

        response = self.client.post(
            self.list_url,
            {"rating": 4, "comment": "Solid", "target_type": "listing", "target_listing_id": str(self.listing.pk)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["rating"], 4)
        self.assertEqual(response.data["target_id"], str(self.listing.pk))
        self.assertFalse(response.data["is_verified_booking"])

    def test_duplicate_review_is_rejected(self):
        ReviewFactory(author=self.author, target_listing=self.listing)
        self.client.force_authenticate(user=self.author)

        response = self.client.post(
            self.list_url,
            {"rating": 2, "target_type": "listing", "target_listing_id": str(self.listing.pk)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "You have already reviewed this")

    def test_rating_out_of_range(self):
        self.client.force_authenticate(user=self.author)

        response = self.client.post(
            self.list_url,
            {"rating": 9, "target_type": "listing", "target_listing_id": str(self.listing.pk)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Review.objects.count(), 0)

    def test_helpful_toggle(self):
        review = ReviewFactory(target_listing=self.listing)
        self.client.force_authenticate(user=self.author)
        url = reverse("marketplace:review-helpful", args=[review.pk])

        first = self.client.post(url)
        second = self.client.post(url)

        self.assertEqual(first.data, {"helpful": True, "helpful_count": 1})
        self.assertEqual(second.data, {"helpful": False, "helpful_count": 0})


class SearchViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("marketplace:global-search")

    def test_short_query_returns_empty(self):
        response = self.client.get(self.url, {"q": "a"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"results": []})

    def test_listing_hit(self):
        listing = ListingFactory(title="Zephyr Grooming Lounge")

        response = self.client.get(self.url, {"q": "zephyr"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        hit = next(item for item in response.data["results"] if item["type"] == "listing")
        self.assertEqual(hit["id"], str(listing.pk))
        self.assertEqual(hit["href"], f"/listings/{listing.pk}")

    def test_failure_returns_500_with_empty_results(self):
        with patch(
            "marketplace.catalog.domain.services.search_service.SearchService.search",
            return_value=service_err(ErrorCodes.INTERNAL_ERROR, "boom"),
        ):
            response = self.client.get(self.url, {"q": "anything"})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"results": []})


class FavoriteViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)

    def test_toggle_then_list_products(self):
        product = ProductFactory()
        toggle_url = reverse("marketplace:favorite-toggle", args=["product", product.pk])

        response = self.client.post(toggle_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["favorited"])

        listed = self.client.get(reverse("marketplace:favorite-list", args=["product"]))
        self.assertEqual(listed.status_code, status.HTTP_200_OK)
        self.assertEqual([item["id"] for item in listed.data], [str(product.pk)])

    def test_unknown_kind(self):
        response = self.client.get(reverse("marketplace:favorite-list", args=["planet"]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)

        response = self.client.get(reverse("marketplace:favorite-list", args=["listing"]))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class AnalyticsViewIntegrationTest(TestCase):
    def test_dashboard_for_provider(self):
        client = APIClient()
        provider = ProviderFactory()
        ListingFactory(owner=provider)
        client.force_authenticate(user=provider)

        response = client.get(reverse("marketplace:analytics-dashboard"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["overview"]["total_listings"], 1)
        self.assertEqual(len(response.data["monthly_data"]), 12)
        self.assertEqual(response.data["reviews"]["total_reviews"], 0)
