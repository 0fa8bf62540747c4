from django.contrib import admin
from django.utils.html import format_html

from .models import Employee, Listing, Product, ProductCategory, Review, Service, Shop, StoreHour


def image_preview(url):
    if url:
        return format_html('<img src="{}" width="100" height="100" />', url)
    return "No Image"


class ServiceInline(admin.TabularInline):
    model = Service
    extra = 0
    fields = ("service_name", "price", "category")


class StoreHourInline(admin.TabularInline):
    model = StoreHour
    extra = 0
    fields = ("day_of_week", "open_time", "close_time", "is_closed")


class EmployeeInline(admin.TabularInline):
    model = Employee
    extra = 0
    fields = ("user", "full_name", "job_title", "is_active")
    raw_id_fields = ("user",)


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = ["title", "owner", "category", "location", "created_at"]
    list_filter = ["category", "created_at"]
    search_fields = ["title", "description", "location", "owner__email"]
    readonly_fields = ["id", "created_at", "updated_at", "preview"]
    raw_id_fields = ["owner"]
    inlines = [ServiceInline, StoreHourInline, EmployeeInline]

    def preview(self, obj):
        return image_preview(obj.image_src)

    preview.short_description = "Preview"


class ProductInline(admin.TabularInline):
    model = Product
    extra = 0
    fields = ("name", "price", "inventory", "is_published", "is_featured")
    show_change_link = True


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    list_display = ["name", "owner", "category", "location", "is_online_only", "is_verified", "shop_enabled"]
    list_filter = ["is_verified", "is_online_only", "shop_enabled", "category"]
    search_fields = ["name", "description", "owner__email"]
    readonly_fields = ["id", "created_at", "updated_at", "preview"]
    raw_id_fields = ["owner", "listing"]
    inlines = [ProductInline]
    actions = ["mark_verified"]

    def preview(self, obj):
        return image_preview(obj.logo)

    preview.short_description = "Logo"

    def mark_verified(self, request, queryset):
        updated = queryset.update(is_verified=True)
        self.message_user(request, f"{updated} shops marked as verified.")

    mark_verified.short_description = "Mark selected shops as verified"


@admin.register(ProductCategory)
class ProductCategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "description", "created_at"]
    search_fields = ["name"]


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["name", "shop", "category", "price", "inventory", "stock_status", "is_published", "is_featured"]
    list_filter = ["is_published", "is_featured", "category"]
    search_fields = ["name", "description", "sku", "shop__name"]
    readonly_fields = ["id", "created_at", "updated_at", "preview"]
    raw_id_fields = ["shop"]

    def stock_status(self, obj):
        if obj.inventory == 0:
            return format_html('<span style="color: red;">Out of stock</span>')
        if obj.is_low_stock:
            return format_html('<span style="color: orange;">Low stock ({})</span>', obj.inventory)
        return format_html('<span style="color: green;">In stock ({})</span>', obj.inventory)

    stock_status.short_description = "Stock"

    def preview(self, obj):
        return image_preview(obj.main_image)

    preview.short_description = "Preview"


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ["author", "target_type", "target_user", "target_listing", "rating", "created_at"]
    list_filter = ["target_type", "rating", "created_at"]
    search_fields = ["author__email", "comment"]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["author", "target_user", "target_listing"]
