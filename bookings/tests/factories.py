import factory
from django.utils import timezone

from accounts.tests.factories import UserFactory
from bookings.models import Reservation
from marketplace.tests.factories import EmployeeFactory, ListingFactory, ServiceFactory


class ReservationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Reservation

    customer = factory.SubFactory(UserFactory)
    listing = factory.SubFactory(ListingFactory)
    service = factory.SubFactory(ServiceFactory, listing=factory.SelfAttribute("..listing"))
    employee = factory.SubFactory(EmployeeFactory, listing=factory.SelfAttribute("..listing"))
    date = factory.LazyFunction(timezone.now)
    time = "10:30 AM"
    service_name = factory.LazyAttribute(lambda o: o.service.service_name)
    total_price = factory.LazyAttribute(lambda o: o.service.price)
    status = "pending"
    payment_status = "pending"
