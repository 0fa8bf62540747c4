from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Listing
from marketplace.tests.factories import (
    EmployeeFactory,
    ListingFactory,
    ProviderFactory,
    ServiceFactory,
    StoreHourFactory,
    UserFactory,
)


class ListingViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.owner = ProviderFactory()
        self.listing = ListingFactory(owner=self.owner, category="Barber")
        ServiceFactory(listing=self.listing, service_name="Cut", price=25)
        StoreHourFactory(listing=self.listing)
        EmployeeFactory(listing=self.listing, full_name="Sam", job_title="Barber")
        self.list_url = reverse("marketplace:listing-list")

    def test_list_is_public_and_shaped(self):
        other = ListingFactory(category="Spa")
        self.owner.favorite_listings.add(other)

        response = self.client.get(self.list_url, {"category": "Barber"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        item = response.data[0]
        self.assertEqual(item["favorite_ids"], [str(other.pk)])
        self.assertEqual(item["services"][0]["service_name"], "Cut")
        self.assertEqual(str(item["services"][0]["listing_id"]), str(self.listing.pk))
        self.assertEqual(item["employees"][0]["full_name"], "Sam")
        self.assertEqual(item["store_hours"][0]["day_of_week"], "Monday")

    def test_detail_includes_owner_and_job_titles(self):
        response = self.client.get(reverse("marketplace:listing-detail", args=[self.listing.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(str(response.data["owner"]["id"]), str(self.owner.pk))
        self.assertEqual(response.data["employees"][0]["job_title"], "Barber")

    def test_detail_not_found(self):
        response = self.client.get(reverse("marketplace:listing-detail", args=["00000000-0000-0000-0000-000000000000"]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["detail"], "Listing not found")

    def test_create_requires_authentication(self):
        response = self.client.post(self.list_url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_listing(self):
        self.client.force_authenticate(user=self.owner)
        payload = {
            "title": "New Spot",
            "description": "Nails",
            "image_src": "https://cdn.example.com/n.jpg",
            "category": "Nails",
            "location": "Austin, TX",
            "address": "5 Oak St",
            "zip_code": "73301",
            "gallery_images": ["https://cdn.example.com/g.jpg"],
            "services": [{"service_name": "Manicure", "price": 35, "category": "Nails"}],
            "store_hours": [{"day_of_week": "Friday", "open_time": "10:00", "close_time": "18:00"}],
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["title"], "New Spot")
        self.assertEqual(response.data["services"][0]["price"], 35)

    def test_create_reports_missing_fields(self):
        self.client.force_authenticate(user=self.owner)

        response = self.client.post(self.list_url, {"title": "Half done"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.data["detail"].startswith("Missing required fields: description"))

    def test_delete_by_non_owner_is_forbidden(self):
        self.client.force_authenticate(user=UserFactory())

        response = self.client.delete(reverse("marketplace:listing-detail", args=[self.listing.pk]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Listing.objects.filter(pk=self.listing.pk).exists())

    def test_infinite_price_filter_is_a_bad_request(self):
        response = self.client.get(self.list_url, {"min_price": "inf"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "min_price and max_price must be numbers")

    def test_owner_updates_listing(self):
        self.client.force_authenticate(user=self.owner)
        cut = self.listing.services.get()

        response = self.client.put(
            reverse("marketplace:listing-detail", args=[self.listing.pk]),
            {
                "title": "Fresh Fades",
                "services": [{"id": str(cut.pk), "service_name": "Cut", "price": 30}],
                "store_hours": [{"day_of_week": "Saturday", "open_time": "10:00", "close_time": "14:00"}],
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["title"], "Fresh Fades")
        self.assertEqual(response.data["services"][0]["price"], 30)
        self.assertEqual([hour["day_of_week"] for hour in response.data["store_hours"]], ["Saturday"])
        self.assertEqual(response.data["employees"], [])

    def test_update_by_non_owner_is_forbidden(self):
        self.client.force_authenticate(user=UserFactory())

        response = self.client.put(
            reverse("marketplace:listing-detail", args=[self.listing.pk]), {"title": "Hijacked"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_gallery_patch(self):
        self.client.force_authenticate(user=self.owner)
        url = reverse("marketplace:listing-detail", args=[self.listing.pk])

        added = self.client.patch(url, {"action": "addImage", "image": "https://cdn.example.com/g.jpg"}, format="json")
        removed = self.client.patch(url, {"action": "removeImage", "image_index": 0}, format="json")
        invalid = self.client.patch(url, {"action": "shuffle"}, format="json")

        self.assertEqual(added.data["gallery_images"], ["https://cdn.example.com/g.jpg"])
        self.assertEqual(removed.data["gallery_images"], [])
        self.assertEqual(invalid.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(invalid.data["detail"], "Invalid action")


class WorkerServicesViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.worker = EmployeeFactory(is_independent=True)
        self.url = reverse("marketplace:employee-services")

    def test_save_then_read_menu(self):
        self.client.force_authenticate(user=self.worker.user)

        saved = self.client.post(
            self.url, {"services": [{"service_name": "Silk press", "category": "Hair", "price": 70}]}, format="json"
        )
        listed = APIClient().get(self.url, {"user_id": str(self.worker.user_id)})

        self.assertEqual(saved.status_code, status.HTTP_200_OK)
        self.assertTrue(saved.data["success"])
        self.assertEqual([service["service_name"] for service in listed.data["services"]], ["Silk press"])

    def test_read_requires_user_id(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_save_requires_authentication(self):
        response = self.client.post(self.url, {"services": []}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_save_without_independent_record(self):
        self.client.force_authenticate(user=UserFactory())

        response = self.client.post(self.url, {"services": []}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["detail"], "Employee record not found")
