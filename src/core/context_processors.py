"""Template context shared by every portal page."""

from django.conf import settings


def site(request):
    return {
        "site_name": settings.SITE_NAME,
        "api_base_url": settings.API_BASE_URL,
    }
