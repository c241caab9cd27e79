import re
from django import forms
from django.conf import settings

VERSION_PATTERN = re.compile(r'\d+\.\d+\.\d+', re.ASCII)
UPLOAD_ID_PATTERN = re.compile(r'[A-Za-z0-9_-]{1,64}')

DEFAULT_MAX_FIRMWARE_SIZE = 50 * 1024 * 1024
DEFAULT_FIRMWARE_EXTENSIONS = ['.bin', '.hex', '.elf', '.img']

# Fields of the draft, in the order their errors are reported
DRAFT_FIELDS = ['target_device', 'version', 'release_note', 'firmware_file']


def max_firmware_size():
    return getattr(settings, 'OTA_MAX_FIRMWARE_SIZE', DEFAULT_MAX_FIRMWARE_SIZE)


def firmware_accept_attr():
    """Extension hint for the file picker, e.g. '.bin,.hex,.elf,.img'"""
    return ','.join(getattr(settings, 'OTA_FIRMWARE_EXTENSIONS', DEFAULT_FIRMWARE_EXTENSIONS))


class FirmwareUploadForm(forms.Form):
    """
    Draft of a firmware submission.

    Every field is optional at the Django level so that each clean_<field>
    method can report its own "required" message. Length checks run on the
    raw value; only the required check ignores surrounding whitespace.
    """
    target_device = forms.CharField(
        required=False,
        strip=False,
        label='Target Device',
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Access control'
        })
    )
    version = forms.CharField(
        required=False,
        strip=False,
        label='Firmware Version',
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'e.g., 1.0.0'
        })
    )
    release_note = forms.CharField(
        required=False,
        strip=False,
        label='Release Note',
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'This OTA is for.....'
        })
    )
    firmware_file = forms.FileField(
        required=False,
        allow_empty_file=True,
        label='Firmware File',
        widget=forms.FileInput(attrs={
            'class': 'dropzone-input'
        })
    )
    upload_id = forms.CharField(required=False, widget=forms.HiddenInput)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['firmware_file'].widget.attrs['accept'] = firmware_accept_attr()

    def clean_version(self):
        version = self.cleaned_data.get('version', '')

        if not version.strip():
            raise forms.ValidationError('Version is required', code='required')
        if not VERSION_PATTERN.fullmatch(version):
            raise forms.ValidationError('Version must be in format x.x.x (e.g., 1.0.0)', code='format')

        return version

    def clean_firmware_file(self):
        firmware_file = self.cleaned_data.get('firmware_file')

        if not firmware_file:
            raise forms.ValidationError('Firmware file is required', code='required')

        # Extensions are only a picker hint, size is the one hard limit
        if firmware_file.size > max_firmware_size():
            raise forms.ValidationError('File size must be less than 50MB', code='too_large')

        return firmware_file

    def clean_target_device(self):
        target_device = self.cleaned_data.get('target_device', '')

        if not target_device.strip():
            raise forms.ValidationError('Target Device is required', code='required')
        if len(target_device) < 4:
            raise forms.ValidationError('Target Device must be more than 3 characters', code='too_short')

        return target_device

    def clean_release_note(self):
        release_note = self.cleaned_data.get('release_note', '')

        if not release_note.strip():
            raise forms.ValidationError('Release Note is required', code='required')
        if len(release_note) < 4:
            raise forms.ValidationError('Release Note must be more than 3 characters', code='too_short')

        return release_note

    def clean_upload_id(self):
        # The id only routes progress reports; a malformed one disables them
        upload_id = self.cleaned_data.get('upload_id', '')
        if upload_id and not UPLOAD_ID_PATTERN.fullmatch(upload_id):
            return ''
        return upload_id

    def error_map(self):
        """Map every draft field to its error message, '' when the field is valid"""
        return {
            name: (self.errors[name][0] if name in self.errors else '')
            for name in DRAFT_FIELDS
        }
