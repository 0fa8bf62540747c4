import pytest

from marketplace.listings.domain.services import IndependentWorkerService
from marketplace.models import Service
from marketplace.tests.factories import EmployeeFactory, ListingFactory, ServiceFactory, UserFactory
from utils.service_base import ErrorCodes


@pytest.fixture
def worker_service():
    return IndependentWorkerService()


@pytest.fixture
def worker():
    return EmployeeFactory(listing=ListingFactory(), is_independent=True)


@pytest.mark.unit
@pytest.mark.django_db
class TestListWorkerServices:
    def test_only_assigned_services_are_listed(self, worker_service, worker):
        mine = ServiceFactory(listing=worker.listing, service_name="Braids")
        ServiceFactory(listing=worker.listing, service_name="Not mine")
        worker.services.add(mine)

        result = worker_service.list_services(str(worker.user_id))

        assert [service.service_name for service in result.value] == ["Braids"]

    def test_regular_employee_has_no_menu(self, worker_service):
        employee = EmployeeFactory()
        employee.services.add(ServiceFactory(listing=employee.listing))

        assert worker_service.list_services(str(employee.user_id)).value == []

    def test_user_id_required(self, worker_service):
        assert worker_service.list_services("").error_detail == "user_id is required"
        assert worker_service.list_services("nope").error == ErrorCodes.INVALID_INPUT


@pytest.mark.unit
@pytest.mark.django_db
class TestReplaceWorkerServices:
    def test_upserts_assigns_and_drops(self, worker_service, worker):
        kept = ServiceFactory(listing=worker.listing, service_name="Braids", price=50)
        stale = ServiceFactory(listing=worker.listing, service_name="Perm")

        result = worker_service.replace_services(
            worker.user,
            [
                {"id": str(kept.pk), "service_name": " Box braids ", "category": "Hair", "price": "65"},
                {"service_name": "Twists", "category": "Hair", "price": 45.5},
                {"service_name": "Free consult", "category": "Hair", "price": 0},
                {"service_name": "", "category": "Hair", "price": 10},
                "garbage",
            ],
        )

        assert result.ok is True
        assert sorted(service.service_name for service in result.value) == ["Box braids", "Twists"]
        kept.refresh_from_db()
        assert kept.price == 65
        assert not Service.objects.filter(pk=stale.pk).exists()
        assert sorted(service.service_name for service in worker.services.all()) == ["Box braids", "Twists"]

    def test_services_must_be_a_list(self, worker_service, worker):
        result = worker_service.replace_services(worker.user, {"service_name": "x"})

        assert result.error_detail == "Services array required"

    def test_requires_independent_record(self, worker_service):
        result = worker_service.replace_services(UserFactory(), [])

        assert result.error == ErrorCodes.NOT_FOUND
        assert result.error_detail == "Employee record not found"

    def test_foreign_service_id_creates_a_new_service(self, worker_service, worker):
        elsewhere = ServiceFactory(service_name="Elsewhere")

        result = worker_service.replace_services(
            worker.user, [{"id": str(elsewhere.pk), "service_name": "Locs", "category": "Hair", "price": 80}]
        )

        elsewhere.refresh_from_db()
        assert elsewhere.service_name == "Elsewhere"
        assert [service.service_name for service in result.value] == ["Locs"]
