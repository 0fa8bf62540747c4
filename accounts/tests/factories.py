import uuid

import factory
from django.contrib.auth import get_user_model

User = get_user_model()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    id = factory.LazyFunction(uuid.uuid4)
    username = factory.Sequence(lambda n: f"user_{n}")
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    name = factory.Faker("name")
    password = factory.PostGenerationMethodCall("set_password", "defaultpassword")
    location = "Austin, TX"
    user_type = "customer"
    is_active = True


class ProviderFactory(UserFactory):
    user_type = "individual"
    username = factory.Sequence(lambda n: f"provider_{n}")
    email = factory.Sequence(lambda n: f"provider_{n}@example.com")
    job_title = factory.Faker("job")
