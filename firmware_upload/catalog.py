"""
Read model behind the "Firmware Uploads" table.

The table shows whatever the configured catalog returns. Submitting the upload
form never writes to it; a catalog backed by the realtime database can replace
StaticCatalog through the OTA_FIRMWARE_CATALOG setting.
"""

from dataclasses import dataclass
from django.conf import settings
from django.utils.module_loading import import_string

STATUS_PENDING = 'Pending'
STATUS_ACTIVE = 'Active'


@dataclass(frozen=True)
class FirmwareRecord:
    file_name: str
    target_device: str
    version: str
    upload_date: str
    size: int
    checksum: str
    status: str

    @property
    def is_pending(self):
        return self.status == STATUS_PENDING

    @property
    def button_variant(self):
        if self.status == STATUS_ACTIVE:
            return 'default'
        if self.status == STATUS_PENDING:
            return 'secondary'
        return 'outline'


SEED_RECORDS = (
    FirmwareRecord(
        file_name='firmware_v1.0.2.bin',
        target_device='ESP32',
        version='1.0.2',
        upload_date='2024-06-01 14:23',
        size=1048576,
        checksum='a1b2c3d4e5f6g7h8i9j0',
        status=STATUS_PENDING,
    ),
    FirmwareRecord(
        file_name='firmware_v1.0.1.bin',
        target_device='ESP8266',
        version='1.0.1',
        upload_date='2024-05-20 09:10',
        size=524288,
        checksum='z9y8x7w6v5u4t3s2r1q0',
        status=STATUS_ACTIVE,
    ),
)


class StaticCatalog:
    """Fixed list of firmware records"""

    def __init__(self, records=SEED_RECORDS):
        self._records = tuple(records)

    def all(self):
        return list(self._records)

    def get(self, file_name):
        for record in self._records:
            if record.file_name == file_name:
                return record
        return None


def get_catalog():
    catalog_class = import_string(getattr(settings, 'OTA_FIRMWARE_CATALOG', 'firmware_upload.catalog.StaticCatalog'))
    return catalog_class()
