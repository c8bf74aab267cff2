"""
WSGI config for GatekeeperService project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "GatekeeperService.settings.prod")

application = get_wsgi_application()
