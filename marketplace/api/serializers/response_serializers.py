"""
Response serializers used only for OpenAPI documentation.
"""

from rest_framework import serializers


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    detail = serializers.CharField(help_text="Human-readable error message")

