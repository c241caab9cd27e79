from django.conf import settings


def portal(request):
    """Expose the portal title to every template"""
    return {
        'portal_title': getattr(settings, 'OTA_PORTAL_TITLE', 'OTA Firmware Upload'),
    }
