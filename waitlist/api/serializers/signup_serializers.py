from rest_framework import serializers


class WaitlistSignupInputSerializer(serializers.Serializer):
    """Documents the request body. Validation messages come from the service."""

    email = serializers.CharField()
    source = serializers.CharField(required=False, default="coming_soon")


class DemoRequestInputSerializer(WaitlistSignupInputSerializer):
    name = serializers.CharField()


class SignupDataSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    email = serializers.EmailField()


class SignupResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    data = SignupDataSerializer()


class SignupCountSerializer(serializers.Serializer):
    message = serializers.CharField()
    count = serializers.IntegerField()
