"""
ASGI config for the medrecords project.

Only HTTP is served; every request is handled independently by Django.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "medrecords.settings")

application = get_asgi_application()
