"""System checks for the content backend and model configuration."""

from django.conf import settings
from django.core.checks import Error, Warning, register

from core.repository import BACKENDS


@register()
def content_backend_configured(app_configs, **kwargs):
    """Ensure CONTENT_BACKEND names a known repository and has what it needs."""
    errors: list[Error] = []

    backend = getattr(settings, "CONTENT_BACKEND", None)
    if backend not in BACKENDS:
        errors.append(
            Error(
                f"CONTENT_BACKEND must be one of {', '.join(sorted(BACKENDS))}, got {backend!r}.",
                id="core.E001",
            )
        )
    elif backend == "mongo" and not getattr(settings, "MONGODB_URI", None):
        errors.append(
            Error(
                "CONTENT_BACKEND is 'mongo' but MONGODB_URI is empty.",
                hint="Set MONGODB_URI to a mongodb:// connection string.",
                id="core.E002",
            )
        )

    return errors


@register()
def tag_suggestions_configured(app_configs, **kwargs):
    """Warn when tag suggestions cannot reach the model."""
    if getattr(settings, "ANTHROPIC_API_KEY", ""):
        return []
    return [
        Warning(
            "ANTHROPIC_API_KEY is not set; tag suggestions will report an error.",
            id="core.W001",
        )
    ]
