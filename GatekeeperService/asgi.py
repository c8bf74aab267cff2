"""
ASGI config for GatekeeperService project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "GatekeeperService.settings.prod")

application = get_asgi_application()
