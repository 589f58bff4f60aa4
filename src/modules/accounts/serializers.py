"""Account DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.models import User


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField()
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    password_confirm = serializers.CharField(write_only=True, trim_whitespace=False)
    phone = serializers.CharField(required=False, allow_blank=True)


class LoginSerializer(serializers.Serializer):
    """``identifier`` is a username, an e-mail or a phone number."""

    identifier = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class UserSerializer(serializers.ModelSerializer):
    is_admin = serializers.BooleanField(source="is_staff", read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "email", "phone", "is_admin", "date_joined"]
        read_only_fields = fields
