from django.contrib import admin

from .models import Comment, Notification, Post, PostMention


class PostMentionInline(admin.TabularInline):
    model = PostMention
    extra = 0
    fields = ["entity_type", "entity_id", "entity_title", "entity_subtitle"]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ["short_content", "author", "category", "media_type", "like_count", "created_at"]
    list_filter = ["category", "media_type", "created_at"]
    search_fields = ["content", "author__email", "author__name", "location", "tag"]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["author"]
    filter_horizontal = ["likes", "bookmarks", "hidden_by"]
    inlines = [PostMentionInline]
    date_hierarchy = "created_at"

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("author")

    @admin.display(description="Content")
    def short_content(self, obj):
        return (obj.content or "")[:60]

    @admin.display(description="Likes")
    def like_count(self, obj):
        return obj.likes.count()


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ["post", "author", "created_at"]
    search_fields = ["content", "author__email"]
    raw_id_fields = ["post", "author"]


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["type", "recipient", "is_read", "created_at"]
    list_filter = ["type", "is_read", "created_at"]
    search_fields = ["content", "recipient__email"]
    raw_id_fields = ["recipient"]
    actions = ["mark_read"]

    @admin.action(description="Mark selected notifications as read")
    def mark_read(self, request, queryset):
        updated = queryset.update(is_read=True)
        self.message_user(request, f"{updated} notifications marked as read.")
