from django.contrib import admin

from .models import Conversation, Message


class MessageInline(admin.TabularInline):
    model = Message
    extra = 0
    fields = ("sender", "body", "image", "created_at")
    readonly_fields = ("created_at",)
    raw_id_fields = ("sender",)


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ("id", "created_at", "last_message_at")
    list_filter = ("created_at",)
    search_fields = ("participants__email", "participants__name")
    filter_horizontal = ("participants",)
    readonly_fields = ("created_at", "last_message_at")
    inlines = [MessageInline]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "conversation", "sender", "created_at")
    list_filter = ("created_at",)
    search_fields = ("sender__email", "body")
    raw_id_fields = ("conversation", "sender")
    readonly_fields = ("created_at",)
