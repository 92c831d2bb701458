"""
WSGI config for the SIMADAM project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "simadam.settings")

application = get_wsgi_application()
