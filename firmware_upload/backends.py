"""
Backend-as-a-service clients for firmware uploads.

A backend client stores the firmware binary in an object store and appends a
metadata record to a realtime database. The client is built lazily from the
``OTA_BACKEND`` setting the first time it is needed, so importing this module
never opens a connection and tests can swap the class through
``override_settings``.
"""

import logging
import threading
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_CLASS = 'firmware_upload.backends.InertBackend'

_backend = None
_backend_lock = threading.Lock()


class BackendError(Exception):
    """Raised by a backend client when the file or its record cannot be written"""


class InertBackend:
    """
    Client that accepts every upload and performs no remote I/O.

    The connection parameters are kept so a deployment can tell which project
    the portal would write to, but no handle is ever opened.
    """

    def __init__(self, config=None):
        self.config = dict(config or {})

    @property
    def project_id(self):
        return self.config.get('project_id', '')

    def store_file(self, path, firmware_file):
        """
        Store a firmware binary.

        Args:
            path: Object path, e.g. firmwares/<device>/<file name>
            firmware_file: Django File or UploadedFile

        Returns:
            str: Download URL, empty when nothing was stored
        """
        logger.info(f"Skipping object store write for {path} (inert backend)")
        return ''

    def push_record(self, path, record):
        """
        Append a metadata record to a list in the realtime database.

        Returns:
            str | None: Key of the new record, None when nothing was written
        """
        logger.info(f"Skipping realtime database push to {path} (inert backend)")
        return None


def get_backend():
    """Return the configured backend client, constructing it on first use"""
    global _backend

    if _backend is None:
        with _backend_lock:
            if _backend is None:
                options = getattr(settings, 'OTA_BACKEND', {}) or {}
                class_path = options.get('CLASS') or DEFAULT_BACKEND_CLASS
                try:
                    backend_class = import_string(class_path)
                except ImportError as e:
                    raise ImproperlyConfigured(f"Cannot import OTA backend '{class_path}': {e}") from e

                _backend = backend_class(options.get('CONFIG', {}))
                logger.info(f"Initialized OTA backend {class_path}")

    return _backend


def reset_backend():
    """Drop the cached client so the next get_backend() builds a fresh one"""
    global _backend
    with _backend_lock:
        _backend = None


@receiver(setting_changed)
def _reset_on_setting_change(sender, setting, **kwargs):
    if setting == 'OTA_BACKEND':
        reset_backend()
