import logging
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

PROGRESS_STEP = 10
PROGRESS_CAP = 90
PROGRESS_DONE = 100

STAGE_READING = 'reading'
STAGE_STORING = 'storing'
STAGE_COMPLETE = 'complete'
STAGE_FAILED = 'failed'


def progress_group_name(upload_id):
    return f'upload_progress_{upload_id}'


def step_percentage(done, total):
    """
    Convert a byte count into a progress percentage.

    Percentages move in whole steps and never pass PROGRESS_CAP, which is
    reserved until the backend has accepted the upload.
    """
    if total <= 0:
        return PROGRESS_CAP
    percent = min(done, total) * 100 // total
    return min(PROGRESS_CAP, percent // PROGRESS_STEP * PROGRESS_STEP)


class ProgressReporter:
    """
    Publishes the progress of one upload to its websocket group.

    Reports are fire-and-forget: without an upload id or a channel layer they
    are only recorded locally, and delivery errors are logged, never raised.
    """

    def __init__(self, upload_id=None, channel_layer=None):
        self.upload_id = upload_id or None
        self._channel_layer = channel_layer
        self.percent = 0
        self.stage = None
        self.history = []

    @property
    def group_name(self):
        if not self.upload_id:
            return None
        return progress_group_name(self.upload_id)

    @property
    def channel_layer(self):
        if self._channel_layer is None and self.upload_id:
            self._channel_layer = get_channel_layer()
        return self._channel_layer

    def advance(self, done, total, stage=STAGE_READING):
        percent = step_percentage(done, total)
        if percent > self.percent or stage != self.stage:
            self._report(max(percent, self.percent), stage)
        return self.percent

    def enter(self, stage):
        if stage != self.stage:
            self._report(self.percent, stage)

    def complete(self):
        self._report(PROGRESS_DONE, STAGE_COMPLETE)

    def fail(self):
        self._report(self.percent, STAGE_FAILED)

    def _report(self, percent, stage):
        self.percent = percent
        self.stage = stage
        self.history.append((percent, stage))

        group = self.group_name
        layer = self.channel_layer
        if not group or layer is None:
            return

        try:
            async_to_sync(layer.group_send)(
                group,
                {
                    "type": "upload.progress",
                    "upload_id": self.upload_id,
                    "progress": percent,
                    "stage": stage,
                }
            )
        except Exception as e:
            logger.warning(f"Could not deliver progress for upload {self.upload_id}: {str(e)}")
