from django.urls import path

from .api.views import DemoRequestView, WaitlistView

app_name = "waitlist"

urlpatterns = [
    path("", WaitlistView.as_view(), name="waitlist"),
    path("demo-request/", DemoRequestView.as_view(), name="demo-request"),
]
