import io
import json
import os
import tempfile
from dataclasses import fields, replace
from typing import Optional
from channels.layers import get_channel_layer
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.contrib.staticfiles import finders
from django.core.exceptions import ImproperlyConfigured
from django.core.files import File
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, TestCase, TransactionTestCase, override_settings
from django.urls import reverse

from .backends import BackendError, InertBackend, get_backend, reset_backend
from .catalog import SEED_RECORDS, StaticCatalog
from .forms import FirmwareUploadForm
from .progress import ProgressReporter, progress_group_name, step_percentage
from .routing import websocket_urlpatterns
from .services import FirmwareUploadService, UploadResult
from .utils import format_file_size

FIFTY_MIB = 50 * 1024 * 1024


class RecordingBackend:
    """Backend double that remembers every write"""

    def __init__(self, config=None):
        self.config = dict(config or {})
        self.files = []
        self.records = []

    def store_file(self, path, firmware_file):
        self.files.append((path, firmware_file.name, firmware_file.read()))
        return f"https://storage.example.com/{path}"

    def push_record(self, path, record):
        self.records.append((path, record))
        return f"record-{len(self.records)}"


class FailingBackend(RecordingBackend):
    def store_file(self, path, firmware_file):
        raise BackendError("object store unavailable")


class FakeChannelLayer:
    def __init__(self):
        self.sent = []

    async def group_send(self, group, message):
        self.sent.append((group, message))


class UnreadableFile(SimpleUploadedFile):
    def chunks(self, chunk_size=None):
        raise OSError("disk went away")


def firmware(size=1024, name='firmware.bin', content_type='application/octet-stream'):
    return SimpleUploadedFile(name, b'\x01' * size, content_type=content_type)


def valid_data(**overrides):
    data = {
        'target_device': 'Access Control',
        'version': '1.0.0',
        'release_note': 'Initial release',
    }
    data.update(overrides)
    return data


class FirmwareUploadFormTestCase(SimpleTestCase):
    def make_form(self, file=None, **overrides):
        files = {'firmware_file': file} if file is not None else {}
        return FirmwareUploadForm(data=valid_data(**overrides), files=files)

    def test_valid_draft(self):
        form = self.make_form(firmware())
        self.assertTrue(form.is_valid())
        self.assertEqual(form.error_map(), {
            'target_device': '',
            'version': '',
            'release_note': '',
            'firmware_file': '',
        })

    def test_empty_draft_reports_every_field(self):
        form = FirmwareUploadForm(data={}, files={})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.error_map(), {
            'target_device': 'Target Device is required',
            'version': 'Version is required',
            'release_note': 'Release Note is required',
            'firmware_file': 'Firmware file is required',
        })

    def test_two_segment_version_only_flags_version(self):
        form = self.make_form(firmware(), version='1.0')
        self.assertFalse(form.is_valid())
        self.assertEqual(form.error_map(), {
            'target_device': '',
            'version': 'Version must be in format x.x.x (e.g., 1.0.0)',
            'release_note': '',
            'firmware_file': '',
        })

    def test_version_format(self):
        for version in ['1', '1.0', '1.0.0.0', 'v1.0.0', '1.a.0', '1.0.0 ', ' 1.0.0', '1..0']:
            form = self.make_form(firmware(), version=version)
            self.assertFalse(form.is_valid(), version)
            self.assertEqual(form.errors['version'], ['Version must be in format x.x.x (e.g., 1.0.0)'])

        for version in ['0.0.0', '1.0.0', '10.20.300']:
            form = self.make_form(firmware(), version=version)
            self.assertTrue(form.is_valid(), version)

    def test_blank_version_is_required(self):
        form = self.make_form(firmware(), version='   ')
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['version'], ['Version is required'])

    def test_short_target_device(self):
        form = self.make_form(firmware(), target_device='abc')
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['target_device'], ['Target Device must be more than 3 characters'])
        self.assertNotIn('version', form.errors)

    def test_blank_target_device(self):
        for value in ['', '    ']:
            form = self.make_form(firmware(), target_device=value)
            self.assertFalse(form.is_valid())
            self.assertEqual(form.errors['target_device'], ['Target Device is required'])

    def test_length_counts_surrounding_whitespace(self):
        form = self.make_form(firmware(), target_device=' abc')
        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['target_device'], ' abc')

    def test_short_release_note(self):
        form = self.make_form(firmware(), release_note='fix')
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['release_note'], ['Release Note must be more than 3 characters'])

        form = self.make_form(firmware(), release_note='')
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['release_note'], ['Release Note is required'])

    def test_missing_file(self):
        form = self.make_form()
        self.assertFalse(form.is_valid())
        self.assertEqual(form.error_map()['firmware_file'], 'Firmware file is required')

    def test_size_limit_boundary(self):
        at_limit = firmware(16)
        at_limit.size = FIFTY_MIB
        self.assertTrue(self.make_form(at_limit).is_valid())

        over_limit = firmware(16)
        over_limit.size = FIFTY_MIB + 1
        form = self.make_form(over_limit)
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['firmware_file'], ['File size must be less than 50MB'])

    @override_settings(OTA_MAX_FIRMWARE_SIZE=2048)
    def test_size_limit_from_settings(self):
        self.assertTrue(self.make_form(firmware(2048)).is_valid())
        self.assertFalse(self.make_form(firmware(2049)).is_valid())

    def test_extension_is_not_enforced(self):
        form = self.make_form(firmware(name='notes.txt', content_type='text/plain'))
        self.assertTrue(form.is_valid())

    def test_empty_file_is_accepted(self):
        form = self.make_form(firmware(0))
        self.assertTrue(form.is_valid())

    def test_picker_accept_hint(self):
        form = FirmwareUploadForm()
        self.assertEqual(form.fields['firmware_file'].widget.attrs['accept'], '.bin,.hex,.elf,.img')

    def test_malformed_upload_id_is_dropped(self):
        form = self.make_form(firmware(), upload_id='not a valid id!')
        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['upload_id'], '')

        form = self.make_form(firmware(), upload_id='3f2b8c1e-upload_1')
        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['upload_id'], '3f2b8c1e-upload_1')


class ProgressTestCase(SimpleTestCase):
    def test_step_percentage(self):
        self.assertEqual(step_percentage(0, 100), 0)
        self.assertEqual(step_percentage(19, 100), 10)
        self.assertEqual(step_percentage(1, 4), 20)
        self.assertEqual(step_percentage(3, 4), 70)
        self.assertEqual(step_percentage(4, 4), 90)
        self.assertEqual(step_percentage(10, 4), 90)
        self.assertEqual(step_percentage(0, 0), 90)

    def test_reports_go_to_the_upload_group(self):
        layer = FakeChannelLayer()
        reporter = ProgressReporter('abc123', channel_layer=layer)

        reporter.advance(50, 100)
        reporter.complete()

        self.assertEqual(layer.sent, [
            ('upload_progress_abc123', {
                'type': 'upload.progress', 'upload_id': 'abc123', 'progress': 50, 'stage': 'reading',
            }),
            ('upload_progress_abc123', {
                'type': 'upload.progress', 'upload_id': 'abc123', 'progress': 100, 'stage': 'complete',
            }),
        ])

    def test_progress_never_moves_backwards(self):
        reporter = ProgressReporter(channel_layer=FakeChannelLayer())
        reporter.advance(80, 100)
        reporter.advance(20, 100)
        self.assertEqual(reporter.percent, 80)

    def test_without_upload_id_nothing_is_sent(self):
        layer = FakeChannelLayer()
        reporter = ProgressReporter(None, channel_layer=layer)
        reporter.advance(1, 1)
        reporter.complete()
        self.assertEqual(layer.sent, [])
        self.assertEqual(reporter.history[-1], (100, 'complete'))

    def test_delivery_errors_are_swallowed(self):
        class BrokenLayer:
            async def group_send(self, group, message):
                raise RuntimeError("layer down")

        reporter = ProgressReporter('abc123', channel_layer=BrokenLayer())
        with self.assertLogs('firmware_upload.progress', level='WARNING'):
            reporter.complete()
        self.assertEqual(reporter.percent, 100)


class FirmwareUploadServiceTestCase(SimpleTestCase):
    def setUp(self):
        self.backend = RecordingBackend()
        self.service = FirmwareUploadService(backend=self.backend)

    def test_submit_stores_file_and_record(self):
        result = self.service.submit(
            target_device='Access Control',
            version='1.0.0',
            release_note='Initial release',
            firmware_file=firmware(1024),
        )

        path, name, content = self.backend.files[0]
        self.assertEqual(path, 'firmwares/Access Control/firmware.bin')
        self.assertEqual(name, 'firmware.bin')
        self.assertEqual(len(content), 1024)

        record_path, record = self.backend.records[0]
        self.assertEqual(record_path, 'firmwareUpdates/Access Control')
        self.assertEqual(record['version'], '1.0.0')
        self.assertEqual(record['fileName'], 'firmware.bin')
        self.assertEqual(record['fileSize'], 1024)
        self.assertEqual(record['fileUrl'], 'https://storage.example.com/firmwares/Access Control/firmware.bin')
        self.assertEqual(record['uploadedAt'], result.uploaded_at)

        self.assertEqual(result.file_size, 1024)
        self.assertEqual(len(result.checksum), 64)
        self.assertEqual(result.record_key, 'record-1')

    def test_progress_reaches_one_hundred(self):
        reporter = ProgressReporter('abc123', channel_layer=FakeChannelLayer())
        payload = File(io.BytesIO(b'\x02' * (256 * 1024)), name='big.bin')

        self.service.submit('Access Control', '1.0.0', 'Initial release', payload, reporter=reporter)

        percents = [percent for percent, stage in reporter.history]
        self.assertEqual(percents[-1], 100)
        self.assertEqual(percents, sorted(percents))
        self.assertTrue(all(p % 10 == 0 for p in percents))
        self.assertTrue(all(p <= 90 for p in percents[:-1]))
        self.assertIn((90, 'storing'), reporter.history)
        self.assertEqual(reporter.history[-1], (100, 'complete'))

    def test_backend_error_propagates(self):
        service = FirmwareUploadService(backend=FailingBackend())
        reporter = ProgressReporter(channel_layer=FakeChannelLayer())

        with self.assertRaises(BackendError):
            service.submit('Access Control', '1.0.0', 'Initial release', firmware(), reporter=reporter)
        self.assertEqual(reporter.stage, 'failed')
        self.assertLess(reporter.percent, 100)

    def test_unreadable_file_becomes_backend_error(self):
        broken = UnreadableFile('firmware.bin', b'\x00' * 16)
        with self.assertRaises(BackendError):
            self.service.submit('Access Control', '1.0.0', 'Initial release', broken)
        self.assertEqual(self.backend.files, [])

    def test_inert_backend_writes_nothing(self):
        service = FirmwareUploadService(backend=InertBackend({'project_id': 'demo'}))
        result = service.submit('Access Control', '1.0.0', 'Initial release', firmware())
        self.assertEqual(result.file_url, '')
        self.assertIsNone(result.record_key)

        record_key = {f.name: f for f in fields(UploadResult)}['record_key']
        self.assertEqual(record_key.type, Optional[str])
        self.assertIsNone(record_key.default)


class BackendFactoryTestCase(SimpleTestCase):
    def tearDown(self):
        reset_backend()

    def test_default_backend_is_inert(self):
        reset_backend()
        self.assertIsInstance(get_backend(), InertBackend)

    @override_settings(OTA_BACKEND={
        'CLASS': 'firmware_upload.tests.RecordingBackend',
        'CONFIG': {'project_id': 'demo'},
    })
    def test_backend_is_built_once_from_settings(self):
        backend = get_backend()
        self.assertIsInstance(backend, RecordingBackend)
        self.assertEqual(backend.config, {'project_id': 'demo'})
        self.assertIs(get_backend(), backend)

    @override_settings(OTA_BACKEND={'CLASS': 'firmware_upload.missing.Backend'})
    def test_bad_class_path(self):
        with self.assertRaises(ImproperlyConfigured):
            get_backend()


class FirmwareCatalogTestCase(SimpleTestCase):
    def test_seed_records(self):
        records = StaticCatalog().all()
        self.assertEqual([r.file_name for r in records], ['firmware_v1.0.2.bin', 'firmware_v1.0.1.bin'])
        self.assertTrue(records[0].is_pending)
        self.assertEqual(records[0].button_variant, 'secondary')
        self.assertEqual(records[1].button_variant, 'default')

    def test_get(self):
        catalog = StaticCatalog()
        self.assertEqual(catalog.get('firmware_v1.0.1.bin').target_device, 'ESP8266')
        self.assertIsNone(catalog.get('nope.bin'))

    def test_other_status_is_outline(self):
        record = replace(SEED_RECORDS[0], status='Retired')
        self.assertFalse(record.is_pending)
        self.assertEqual(record.button_variant, 'outline')


class FormatFileSizeTestCase(SimpleTestCase):
    def test_format_file_size(self):
        self.assertEqual(format_file_size(0), '0 Bytes')
        self.assertEqual(format_file_size(1000), '1000 Bytes')
        self.assertEqual(format_file_size(1024), '1 KB')
        self.assertEqual(format_file_size(1536), '1.5 KB')
        self.assertEqual(format_file_size(1048576), '1 MB')
        self.assertEqual(format_file_size(1234567), '1.18 MB')
        self.assertEqual(format_file_size(5 * 1024 ** 4), '5120 GB')


class UploadViewTestCase(TestCase):
    def setUp(self):
        reset_backend()
        self.url = reverse('firmware_upload')

    def tearDown(self):
        reset_backend()

    def test_blank_form_and_table(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Upload Firmware')
        self.assertContains(response, 'accept=".bin,.hex,.elf,.img"')
        self.assertContains(response, 'Firmware Uploads')
        self.assertContains(response, '1,048,576 bytes')
        self.assertContains(response, '524,288 bytes')
        self.assertContains(response, reverse('firmware_status', args=['firmware_v1.0.2.bin']))
        self.assertNotContains(response, reverse('firmware_status', args=['firmware_v1.0.1.bin']))
        self.assertNotContains(response, 'class="field-error"')

    def test_invalid_draft_shows_inline_errors(self):
        response = self.client.post(self.url, valid_data(version='1.0'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Version must be in format x.x.x (e.g., 1.0.0)')
        self.assertContains(response, 'Firmware file is required')
        self.assertNotContains(response, 'Target Device must be more than 3 characters')
        self.assertNotContains(response, 'Upload Successful!')

    @override_settings(OTA_BACKEND={'CLASS': 'firmware_upload.tests.RecordingBackend', 'CONFIG': {}})
    def test_successful_upload_flow(self):
        data = valid_data(firmware_file=firmware(1024), upload_id='abc123')
        response = self.client.post(self.url, data)
        self.assertRedirects(response, reverse('firmware_upload_success'), fetch_redirect_response=False)

        backend = get_backend()
        self.assertEqual(backend.records[0][0], 'firmwareUpdates/Access Control')

        response = self.client.get(reverse('firmware_upload_success'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Upload Successful!')
        self.assertContains(response, 'Firmware version 1.0.0 has been uploaded for device Access Control')
        self.assertContains(response, 'Upload Another Firmware')
        self.assertContains(response, 'firmware.bin (1 KB)')
        self.assertEqual(response['Refresh'], f"3; url={self.url}")

        # The result is discarded once shown
        response = self.client.get(reverse('firmware_upload_success'))
        self.assertRedirects(response, self.url)

    def test_success_page_needs_a_result(self):
        response = self.client.get(reverse('firmware_upload_success'))
        self.assertRedirects(response, self.url)

    @override_settings(OTA_BACKEND={'CLASS': 'firmware_upload.tests.FailingBackend', 'CONFIG': {}})
    def test_backend_failure_shows_banner(self):
        with self.assertLogs('firmware_upload.views', level='ERROR'):
            response = self.client.post(self.url, valid_data(firmware_file=firmware()))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Upload failed. Please try again.')
        self.assertContains(response, 'value="Access Control"')
        self.assertNotContains(response, 'class="field-error"')

    def test_default_backend_upload_succeeds(self):
        response = self.client.post(self.url, valid_data(firmware_file=firmware()))
        self.assertRedirects(response, reverse('firmware_upload_success'), fetch_redirect_response=False)

    def test_script_upload_gets_success_location(self):
        response = self.client.post(
            self.url, valid_data(firmware_file=firmware()), HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'redirect': reverse('firmware_upload_success')})

        # The result is still waiting for the success page
        response = self.client.get(reverse('firmware_upload_success'))
        self.assertContains(response, 'Firmware version 1.0.0 has been uploaded for device Access Control')

    def test_script_upload_of_invalid_draft_gets_page(self):
        response = self.client.post(
            self.url, valid_data(release_note='fix'), HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response['Content-Type'].startswith('text/html'))
        self.assertContains(response, 'Release Note must be more than 3 characters')

    def test_page_carries_script_hooks(self):
        response = self.client.get(self.url)
        self.assertContains(response, 'id="firmware-upload-form"')
        self.assertContains(response, 'id="dropzone"')
        self.assertContains(response, 'class="button-ghost remove-file"')
        self.assertContains(response, 'name="upload_id"')
        self.assertContains(response, 'id="upload-progress"')
        self.assertContains(response, 'data-progress-socket="/ws/uploads/"')
        self.assertContains(response, f'data-max-size="{FIFTY_MIB}"')
        self.assertContains(response, 'firmware_upload/upload.js')

    def test_missing_file_error_slot(self):
        response = self.client.post(self.url, valid_data())
        self.assertContains(response, 'data-error-for="firmware_file"')
        self.assertContains(response, 'dropzone dropzone-error')
        self.assertNotContains(response, 'data-error-for="version"')


class UploadScriptTestCase(SimpleTestCase):
    """The page script mirrors the form rules and drives the dropzone"""

    def setUp(self):
        path = finders.find('firmware_upload/upload.js')
        self.assertIsNotNone(path)
        with open(path, encoding='utf-8') as fh:
            self.source = fh.read()

    def test_mirrors_every_form_message(self):
        messages = [
            'Version is required',
            'Version must be in format x.x.x (e.g., 1.0.0)',
            'Firmware file is required',
            'File size must be less than 50MB',
            'Target Device is required',
            'Target Device must be more than 3 characters',
            'Release Note is required',
            'Release Note must be more than 3 characters',
            'Upload failed. Please try again.',
        ]
        for message in messages:
            self.assertIn(f'"{message}"', self.source)

        # Every message the form can raise is known to the script
        form = FirmwareUploadForm(data={}, files={})
        form.is_valid()
        for message in form.error_map().values():
            self.assertIn(message, messages)

    def test_validates_before_uploading(self):
        handler = self.source[self.source.index('form.addEventListener("submit"'):]
        self.assertLess(handler.index('validateDraft()'), handler.index('setUploading(true)'))
        self.assertLess(handler.index('if (failing.length)'), handler.index('setUploading(true)'))

    def test_transfer_progress_is_stepped_and_capped(self):
        self.assertIn('xhr.upload.onprogress', self.source)
        self.assertIn('var PROGRESS_STEP = 10;', self.source)
        self.assertIn('var PROGRESS_CAP = 90;', self.source)
        self.assertIn('"X-Requested-With", "XMLHttpRequest"', self.source)

    def test_remove_and_drop_clear_the_file_error(self):
        remove = self.source[self.source.index('function removeFile()'):]
        remove = remove[:remove.index('}\n')]
        self.assertIn('fileInput.value = "";', remove)
        self.assertIn('clearError("firmware_file");', remove)

        drop = self.source[self.source.index('function handleDrop(event)'):]
        drop = drop[:drop.index('\n  }\n')]
        self.assertIn('dropzone.classList.remove("dropzone-active");', drop)
        self.assertIn('transfer.items.add(files[0]);', drop)
        self.assertIn('clearError("firmware_file");', drop)

        for hook in ['getElementById("dropzone")', '".remove-file"', 'input[name=upload_id]', 'data-error-for']:
            self.assertIn(hook, self.source)


class FirmwareStatusViewTestCase(TestCase):
    def test_pending_status_click_notifies(self):
        url = reverse('firmware_status', args=['firmware_v1.0.2.bin'])
        response = self.client.post(url, follow=True)
        self.assertRedirects(response, reverse('firmware_upload'))
        self.assertContains(response, 'Status for firmware_v1.0.2.bin clicked!')

    def test_active_status_is_refused(self):
        url = reverse('firmware_status', args=['firmware_v1.0.1.bin'])
        response = self.client.post(url)
        self.assertEqual(response.status_code, 400)

    def test_unknown_firmware(self):
        url = reverse('firmware_status', args=['missing.bin'])
        response = self.client.post(url)
        self.assertEqual(response.status_code, 404)

    def test_get_not_allowed(self):
        url = reverse('firmware_status', args=['firmware_v1.0.2.bin'])
        response = self.client.get(url)
        self.assertEqual(response.status_code, 405)


class FirmwareListApiTestCase(TestCase):
    def test_list(self):
        response = self.client.get(reverse('firmware_list'))
        self.assertEqual(response.status_code, 200)

        data = response.json()
        self.assertEqual(len(data), 2)
        self.assertEqual(data[0]['file_name'], 'firmware_v1.0.2.bin')
        self.assertEqual(data[0]['size'], 1048576)
        self.assertEqual(data[0]['size_display'], '1 MB')
        self.assertTrue(data[0]['is_pending'])
        self.assertEqual(data[1]['status'], 'Active')


class UploadProgressConsumerTestCase(TransactionTestCase):
    # Consumers close old database connections on disconnect
    async def test_progress_is_forwarded_to_socket(self):
        communicator = WebsocketCommunicator(URLRouter(websocket_urlpatterns), '/ws/uploads/abc123/')
        connected, _ = await communicator.connect()
        self.assertTrue(connected)

        await get_channel_layer().group_send(progress_group_name('abc123'), {
            'type': 'upload.progress',
            'upload_id': 'abc123',
            'progress': 40,
            'stage': 'reading',
        })

        message = await communicator.receive_json_from()
        self.assertEqual(message, {
            'type': 'upload_progress',
            'upload_id': 'abc123',
            'progress': 40,
            'stage': 'reading',
        })

        await communicator.disconnect()


class UploadFirmwareCommandTestCase(SimpleTestCase):
    def setUp(self):
        reset_backend()
        handle, self.path = tempfile.mkstemp(suffix='.bin')
        with os.fdopen(handle, 'wb') as fh:
            fh.write(b'\x03' * 2048)

    def tearDown(self):
        os.remove(self.path)
        reset_backend()

    def test_upload(self):
        out = io.StringIO()
        call_command(
            'upload_firmware', self.path,
            target_device='Access Control', firmware_version='1.0.0', release_note='Initial release',
            stdout=out,
        )
        self.assertIn('2 KB', out.getvalue())
        self.assertIn('Firmware version 1.0.0 has been uploaded for device Access Control', out.getvalue())

    def test_json_output(self):
        out = io.StringIO()
        call_command(
            'upload_firmware', self.path, '--json',
            target_device='Access Control', firmware_version='1.0.0', release_note='Initial release',
            stdout=out,
        )
        payload = json.loads(out.getvalue().split('...\n', 1)[1])
        self.assertEqual(payload['file_size'], 2048)
        self.assertEqual(payload['file_size_display'], '2 KB')

    def test_invalid_draft(self):
        err = io.StringIO()
        with self.assertRaises(CommandError):
            call_command(
                'upload_firmware', self.path,
                target_device='abc', firmware_version='1.0', release_note='Initial release',
                stdout=io.StringIO(), stderr=err,
            )
        self.assertIn('Version must be in format x.x.x', err.getvalue())
        self.assertIn('Target Device must be more than 3 characters', err.getvalue())

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            call_command(
                'upload_firmware', self.path + '.missing',
                target_device='Access Control', firmware_version='1.0.0', release_note='Initial release',
            )
