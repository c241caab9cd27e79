"""
ASGI config for ota_portal project.

It exposes the ASGI callable as a module-level variable named ``application``.
HTTP goes to Django, websockets carry upload progress.

For more information on this file, see
https://docs.djangoproject.com/en/5.1/howto/deployment/asgi/
"""

import os
import logging
from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'ota_portal.settings')

# Django must be set up before the routing imports pull in app code
django_asgi_application = get_asgi_application()

from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402
from channels.security.websocket import AllowedHostsOriginValidator  # noqa: E402
from firmware_upload.routing import websocket_urlpatterns  # noqa: E402

logger = logging.getLogger(__name__)

application = ProtocolTypeRouter({
    "http": django_asgi_application,
    "websocket": AllowedHostsOriginValidator(
        URLRouter(
            websocket_urlpatterns
        )
    ),
})

logger.info("ASGI application ready")
