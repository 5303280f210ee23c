"""Serializers for Author CRUD."""

from rest_framework import serializers


class AuthorSerializer(serializers.Serializer):
    """Validate author payloads and render Author records.

    Name and email are required on create; email is stored trimmed and
    lower-cased so uniqueness is case-insensitive.
    """

    id = serializers.CharField(read_only=True)
    name = serializers.CharField(max_length=200)
    email = serializers.EmailField()
    avatar = serializers.URLField(required=False, allow_blank=True, default="")
    bio = serializers.CharField(required=False, allow_blank=True, default="")
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)

    @staticmethod
    def validate_email(value):
        return value.strip().lower()


__all__ = ["AuthorSerializer"]
