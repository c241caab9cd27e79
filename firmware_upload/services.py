import hashlib
import logging
from dataclasses import asdict, dataclass
from typing import Optional
from django.utils import timezone
from .backends import BackendError, get_backend
from .progress import ProgressReporter, STAGE_READING, STAGE_STORING

logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    target_device: str
    version: str
    file_name: str
    file_size: int
    checksum: str
    file_url: str
    uploaded_at: str
    record_key: Optional[str] = None

    def as_dict(self):
        return asdict(self)


class FirmwareUploadService:
    """Service class that hands an accepted firmware draft to the backend client"""

    def __init__(self, backend=None):
        self._backend = backend

    @property
    def backend(self):
        if self._backend is None:
            self._backend = get_backend()
        return self._backend

    def submit(self, target_device, version, release_note, firmware_file, upload_id=None, reporter=None):
        """
        Upload a validated firmware draft

        Args:
            target_device: Device the firmware is built for
            version: Version string in x.y.z form
            release_note: Free text describing the release
            firmware_file: Django File or UploadedFile
            upload_id: Optional id of the websocket group watching this upload
            reporter: Optional ProgressReporter, built from upload_id when omitted

        Returns:
            UploadResult

        Raises:
            BackendError: if the file cannot be read or the backend rejects it
        """
        if reporter is None:
            reporter = ProgressReporter(upload_id)

        file_name = firmware_file.name
        logger.info(f"Uploading {file_name} version {version} for {target_device}")

        try:
            checksum = self._checksum(firmware_file, reporter)

            reporter.enter(STAGE_STORING)
            file_url = self.backend.store_file(self._storage_path(target_device, file_name), firmware_file)

            uploaded_at = timezone.now().isoformat()
            record_key = self.backend.push_record(
                self._record_path(target_device),
                {
                    'version': version,
                    'fileUrl': file_url,
                    'fileName': file_name,
                    'fileSize': firmware_file.size,
                    'uploadedAt': uploaded_at,
                }
            )
        except OSError as e:
            reporter.fail()
            logger.error(f"I/O error while uploading {file_name}: {str(e)}")
            raise BackendError(f"I/O error while uploading {file_name}") from e
        except BackendError:
            reporter.fail()
            raise

        reporter.complete()
        logger.info(f"Firmware {file_name} ({release_note!r}) uploaded for {target_device}, sha256={checksum}")

        return UploadResult(
            target_device=target_device,
            version=version,
            file_name=file_name,
            file_size=firmware_file.size,
            checksum=checksum,
            file_url=file_url or '',
            uploaded_at=uploaded_at,
            record_key=record_key,
        )

    def _checksum(self, firmware_file, reporter):
        """SHA256 of the file, reporting progress as chunks are read"""
        total = firmware_file.size or 0
        digest = hashlib.sha256()
        done = 0

        reporter.advance(0, total, STAGE_READING)
        firmware_file.seek(0)
        for chunk in firmware_file.chunks():
            digest.update(chunk)
            done += len(chunk)
            reporter.advance(done, total, STAGE_READING)
        firmware_file.seek(0)

        return digest.hexdigest()

    def _storage_path(self, target_device, file_name):
        return f"firmwares/{target_device}/{file_name}"

    def _record_path(self, target_device):
        return f"firmwareUpdates/{target_device}"
