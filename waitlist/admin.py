from django.contrib import admin

from .models import DemoRequest, WaitlistEntry


@admin.register(WaitlistEntry)
class WaitlistEntryAdmin(admin.ModelAdmin):
    list_display = ["email", "source", "is_active", "created_at"]
    list_filter = ["source", "is_active"]
    search_fields = ["email"]
    readonly_fields = ["id", "created_at", "updated_at"]

    fieldsets = (
        ("Signup", {"fields": ("id", "email", "source", "is_active")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )


@admin.register(DemoRequest)
class DemoRequestAdmin(admin.ModelAdmin):
    list_display = ["name", "email", "source", "is_active", "created_at"]
    list_filter = ["source", "is_active"]
    search_fields = ["name", "email"]
    readonly_fields = ["id", "created_at", "updated_at"]

    fieldsets = (
        ("Request", {"fields": ("id", "name", "email", "source", "is_active")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )
