import logging
from django.conf import settings
from django.contrib import messages
from django.http import Http404, HttpResponseBadRequest, JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_http_methods
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .backends import BackendError
from .catalog import get_catalog
from .forms import FirmwareUploadForm, firmware_accept_attr, max_firmware_size
from .serializers import FirmwareRecordSerializer, UploadResultSerializer
from .services import FirmwareUploadService

logger = logging.getLogger(__name__)

UPLOAD_FAILED_MESSAGE = 'Upload failed. Please try again.'
SUCCESS_SESSION_KEY = 'firmware_upload_result'


def _reset_delay_seconds():
    return getattr(settings, 'OTA_RESET_DELAY_SECONDS', 3)


def _is_script_upload(request):
    # The page script posts with XMLHttpRequest so it can follow the transfer
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'


@require_http_methods(["GET", "POST"])
def upload_firmware(request):
    """Firmware upload page: the draft form and the firmware table"""
    upload_error = ''

    if request.method == 'POST':
        form = FirmwareUploadForm(request.POST, request.FILES)
        if form.is_valid():
            data = form.cleaned_data
            service = FirmwareUploadService()
            try:
                result = service.submit(
                    target_device=data['target_device'],
                    version=data['version'],
                    release_note=data['release_note'],
                    firmware_file=data['firmware_file'],
                    upload_id=data['upload_id'],
                )
            except BackendError as e:
                logger.error(f"Upload failed: {str(e)}", exc_info=True)
                upload_error = UPLOAD_FAILED_MESSAGE
            else:
                request.session[SUCCESS_SESSION_KEY] = result.as_dict()
                if _is_script_upload(request):
                    return JsonResponse({'redirect': reverse('firmware_upload_success')})
                return redirect('firmware_upload_success')
        else:
            logger.info(f"Firmware draft rejected: {', '.join(sorted(form.errors))}")
    else:
        form = FirmwareUploadForm()

    context = {
        'form': form,
        'upload_error': upload_error,
        'accept_hint': firmware_accept_attr().replace(',', ', '),
        'max_firmware_size': max_firmware_size(),
        'firmware_records': get_catalog().all(),
    }
    return render(request, 'firmware_upload/upload.html', context)


@require_http_methods(["GET"])
def upload_success(request):
    """Confirmation of an accepted upload, returns to a blank form on its own"""
    result = request.session.pop(SUCCESS_SESSION_KEY, None)
    if not result:
        return redirect('firmware_upload')

    delay = _reset_delay_seconds()
    context = {
        'result': UploadResultSerializer(result).data,
        'reset_delay': delay,
    }
    response = render(request, 'firmware_upload/success.html', context)
    response['Refresh'] = f"{delay}; url={reverse('firmware_upload')}"
    return response


@require_http_methods(["POST"])
def firmware_status(request, file_name):
    """Status button of a table row. Only pending firmware reacts."""
    record = get_catalog().get(file_name)
    if record is None:
        raise Http404("Firmware not found")

    if not record.is_pending:
        return HttpResponseBadRequest(f"Status of {record.file_name} is {record.status}")

    messages.info(request, f"Status for {record.file_name} clicked!")
    return redirect('firmware_upload')


@api_view(['GET'])
def firmware_list(request):
    """JSON rendering of the firmware table"""
    serializer = FirmwareRecordSerializer(get_catalog().all(), many=True)
    return Response(serializer.data)
