"""App configuration for the server-rendered portal."""

from django.apps import AppConfig


class PortalConfig(AppConfig):
    """Portal app renders the public pages and the authoring admin."""

    name = "portal"
