# Generated manually for activity app

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Post',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('content', models.TextField(blank=True)),
                ('image_src', models.CharField(blank=True, max_length=500)),
                ('media_url', models.CharField(blank=True, max_length=500)),
                ('media_type', models.CharField(blank=True, choices=[('image', 'Image'), ('video', 'Video'), ('gif', 'GIF')], max_length=10)),
                ('media_overlay', models.JSONField(blank=True, help_text='Text overlay drawn over the media', null=True)),
                ('location', models.CharField(blank=True, max_length=200)),
                ('tag', models.CharField(blank=True, max_length=100)),
                ('category', models.CharField(blank=True, max_length=100)),
                ('post_type', models.CharField(blank=True, max_length=30)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('author', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='posts', to=settings.AUTH_USER_MODEL)),
                ('likes', models.ManyToManyField(blank=True, related_name='liked_posts', to=settings.AUTH_USER_MODEL)),
                ('bookmarks', models.ManyToManyField(blank=True, related_name='bookmarked_posts', to=settings.AUTH_USER_MODEL)),
                ('hidden_by', models.ManyToManyField(blank=True, related_name='hidden_posts', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='PostMention',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('entity_id', models.CharField(max_length=64)),
                ('entity_type', models.CharField(choices=[('user', 'User'), ('listing', 'Listing'), ('shop', 'Shop')], max_length=10)),
                ('entity_title', models.CharField(max_length=200)),
                ('entity_subtitle', models.CharField(blank=True, max_length=200)),
                ('entity_image', models.CharField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='mentions', to='activity.post')),
            ],
            options={
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='Comment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('content', models.TextField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('author', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='comments', to=settings.AUTH_USER_MODEL)),
                ('post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='comments', to='activity.post')),
            ],
            options={
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='Notification',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('NEW_FOLLOWER', 'New follower'), ('MUTUAL_FOLLOW', 'Mutual follow'), ('LISTING_FOLLOW', 'Listing followed'), ('SHOP_FOLLOW', 'Shop followed'), ('NEW_LIKE', 'Post liked'), ('NEW_BOOKMARK', 'Post bookmarked'), ('NEW_COMMENT', 'New comment'), ('NEW_RESERVATION', 'New reservation'), ('RESERVATION_ACCEPTED', 'Reservation accepted'), ('RESERVATION_DECLINED', 'Reservation declined'), ('RESERVATION_COMPLETED', 'Reservation completed'), ('RESERVATION_CANCELLED_BY_BUSINESS', 'Reservation cancelled by business'), ('RESERVATION_CANCELLED_BY_USER', 'Reservation cancelled by customer'), ('NEW_REVIEW', 'New review'), ('NEW_MESSAGE', 'New message'), ('SYSTEM', 'System')], max_length=40)),
                ('content', models.TextField()),
                ('is_read', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('recipient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='post',
            index=models.Index(fields=['author', '-created_at'], name='activity_post_author_idx'),
        ),
        migrations.AddIndex(
            model_name='post',
            index=models.Index(fields=['category', '-created_at'], name='activity_post_category_idx'),
        ),
        migrations.AddIndex(
            model_name='post',
            index=models.Index(fields=['-created_at'], name='activity_post_created_idx'),
        ),
        migrations.AddIndex(
            model_name='postmention',
            index=models.Index(fields=['entity_type', 'entity_id'], name='activity_mention_entity_idx'),
        ),
        migrations.AddIndex(
            model_name='notification',
            index=models.Index(fields=['recipient', '-created_at'], name='activity_notif_recipient_idx'),
        ),
        migrations.AddIndex(
            model_name='notification',
            index=models.Index(fields=['recipient', 'is_read'], name='activity_notif_unread_idx'),
        ),
    ]
