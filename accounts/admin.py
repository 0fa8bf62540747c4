from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ["email", "username", "name", "user_type", "subscription_tier", "is_active", "date_joined"]
    list_filter = ["user_type", "is_subscribed", "is_active", "is_staff"]
    search_fields = ["email", "username", "name"]
    ordering = ["-date_joined"]
    readonly_fields = ["id", "date_joined", "last_login"]
    filter_horizontal = ["following", "groups", "user_permissions"]

    fieldsets = UserAdmin.fieldsets + (
        ("Profile", {"fields": ("id", "name", "image", "bio", "location", "user_type", "job_title", "interests")}),
        (
            "Subscription",
            {
                "fields": (
                    "subscription_tier",
                    "is_subscribed",
                    "subscription_billing_interval",
                    "subscription_start_date",
                    "subscription_end_date",
                )
            },
        ),
        ("Social", {"fields": ("following",)}),
    )
