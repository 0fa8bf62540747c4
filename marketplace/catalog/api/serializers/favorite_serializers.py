from rest_framework import serializers


class FavoriteToggleSerializer(serializers.Serializer):
    favorited = serializers.BooleanField()
    kind = serializers.CharField()
    target_id = serializers.CharField()
