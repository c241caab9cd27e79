import json
import os
from django.core.files import File
from django.core.management.base import BaseCommand, CommandError
from firmware_upload.backends import BackendError
from firmware_upload.forms import FirmwareUploadForm
from firmware_upload.serializers import UploadResultSerializer
from firmware_upload.services import FirmwareUploadService
from firmware_upload.utils import format_file_size


class Command(BaseCommand):
    help = 'Validate and upload a firmware file the same way the upload form does'

    def add_arguments(self, parser):
        parser.add_argument(
            'path',
            help='Path of the firmware binary (.bin, .hex, .elf, .img)',
        )
        parser.add_argument(
            '--target-device',
            required=True,
            help='Device the firmware is built for',
        )
        parser.add_argument(
            '--firmware-version',
            required=True,
            help='Firmware version in x.x.x format',
        )
        parser.add_argument(
            '--release-note',
            required=True,
            help='What this OTA release is for',
        )
        parser.add_argument(
            '--json',
            action='store_true',
            help='Print the upload result as JSON',
        )

    def handle(self, *args, **options):
        path = options['path']
        if not os.path.isfile(path):
            raise CommandError(f'Firmware file {path} not found')

        with open(path, 'rb') as fh:
            firmware_file = File(fh, name=os.path.basename(path))
            form = FirmwareUploadForm(
                data={
                    'target_device': options['target_device'],
                    'version': options['firmware_version'],
                    'release_note': options['release_note'],
                },
                files={'firmware_file': firmware_file},
            )

            if not form.is_valid():
                for field, message in form.error_map().items():
                    if message:
                        self.stderr.write(self.style.ERROR(f'{field}: {message}'))
                raise CommandError('Firmware draft is invalid')

            self.stdout.write(
                f'Uploading {firmware_file.name} ({format_file_size(firmware_file.size)}) '
                f'for {options["target_device"]}...'
            )

            try:
                result = FirmwareUploadService().submit(
                    target_device=form.cleaned_data['target_device'],
                    version=form.cleaned_data['version'],
                    release_note=form.cleaned_data['release_note'],
                    firmware_file=form.cleaned_data['firmware_file'],
                )
            except BackendError as e:
                raise CommandError(f'Upload failed. Please try again. ({e})') from e

        if options['json']:
            self.stdout.write(json.dumps(UploadResultSerializer(result).data, indent=2))
            return

        self.stdout.write(f'SHA256: {result.checksum}')
        self.stdout.write(self.style.SUCCESS(
            f'Firmware version {result.version} has been uploaded for device {result.target_device}'
        ))
