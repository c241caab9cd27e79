from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class FirmwareUploadConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'firmware_upload'
    verbose_name = 'OTA Firmware Upload'

    def ready(self):
        # Registers the setting_changed receiver that drops cached backend clients
        from . import backends  # noqa: F401

        logger.debug("Firmware upload app ready")
