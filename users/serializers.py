"""Serializers for sign-in, registration, profile and admin user listing.

- UserSerializer: the account as returned to clients (also embedded in
  every sign-in response).
- RegistrationSerializer / SignInSerializer / AdminSignInSerializer /
  GoogleSignInSerializer: action serializers validating request bodies only;
  the work happens in ``users.services``.
"""

from rest_framework import serializers

from .models import User


class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(required=False, allow_blank=True, max_length=255)
    city = serializers.CharField(required=False, allow_blank=True, max_length=120)
    postal_code = serializers.CharField(required=False, allow_blank=True, max_length=20)
    country = serializers.CharField(required=False, allow_blank=True, max_length=120)


class UserSerializer(serializers.ModelSerializer):
    is_admin = serializers.BooleanField(source="is_staff", read_only=True)
    address = AddressSerializer(read_only=True)
    name = serializers.CharField(source="display_name", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "name",
            "first_name",
            "last_name",
            "phone",
            "picture",
            "google_id",
            "is_admin",
            "address",
            "date_joined",
        ]
        read_only_fields = fields


class RegistrationSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    password = serializers.CharField(write_only=True)


class SignInSerializer(serializers.Serializer):
    """Email (or username) and password."""

    email = serializers.CharField()
    password = serializers.CharField(write_only=True)


class AdminSignInSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True)


class GoogleSignInSerializer(serializers.Serializer):
    token = serializers.CharField()


class SignOutSerializer(serializers.Serializer):
    """Request body for signing out (blacklisting the refresh token)."""

    refresh = serializers.CharField()


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    address = AddressSerializer(required=False)
    password = serializers.CharField(write_only=True, required=False, allow_blank=True)
    current_password = serializers.CharField(write_only=True, required=False, allow_blank=True)

    def validate(self, attrs):
        if attrs.get("password") and not attrs.get("current_password"):
            raise serializers.ValidationError({"current_password": "Current password is required."})
        return attrs


class AuthResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    access = serializers.CharField()
    refresh = serializers.CharField()
