from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ["service_name", "listing", "customer", "date", "time", "total_price", "status", "payment_status"]
    list_filter = ["status", "payment_status", "created_at"]
    search_fields = ["service_name", "listing__title", "customer__email", "customer__name"]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["customer", "listing", "service", "employee"]
    date_hierarchy = "date"
