"""
WSGI config for ota_portal project.

It exposes the WSGI callable as a module-level variable named ``application``.
Upload progress is only pushed to browsers when the channel layer is shared
with an ASGI process (set REDIS_URL).

For more information on this file, see
https://docs.djangoproject.com/en/5.1/howto/deployment/wsgi/
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'ota_portal.settings')

application = get_wsgi_application()
