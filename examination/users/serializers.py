"""
Examination User Serializers

Serializers:
- RegisterSerializer: Registration input with password validation
- UserSerializer: Public user data including the profile name

Author: DSP Development Team
Version: 1.0.0
"""

from typing import Dict, Any
from django.contrib.auth.models import User
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .models import display_name


class UserSerializer(serializers.ModelSerializer):
    """
    Public user data. The credential hash is never serialized.
    """

    name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ("id", "username", "name", "email")
        read_only_fields = fields

    def get_name(self, obj: User) -> str:
        return display_name(obj)


class UserSummarySerializer(UserSerializer):
    class Meta(UserSerializer.Meta):
        fields = ("id", "username", "name")
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """
    Registration input. Uniqueness of username and email is checked by the
    entity store inside the creating transaction.
    """

    username = serializers.CharField(max_length=150)
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run Django's password validators against the candidate user.

        Raises:
            ValidationError: If the password is rejected
        """
        candidate = User(username=attrs["username"], email=attrs["email"])
        try:
            validate_password(attrs["password"], user=candidate)
        except DjangoValidationError as e:
            raise serializers.ValidationError({"password": list(e.messages)})
        return attrs
