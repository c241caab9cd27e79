import json
import logging
from channels.generic.websocket import AsyncWebsocketConsumer
from .progress import progress_group_name

logger = logging.getLogger(__name__)


class UploadProgressConsumer(AsyncWebsocketConsumer):
    """Streams progress reports of one upload to the browser that started it"""

    async def connect(self):
        try:
            self.upload_id = self.scope['url_route']['kwargs']['upload_id']
            self.group_name = progress_group_name(self.upload_id)

            await self.channel_layer.group_add(
                self.group_name,
                self.channel_name
            )

            await self.accept()
            logger.info(f"Progress socket accepted for upload {self.upload_id}")

        except Exception as e:
            logger.error(f"Error in progress socket connect: {str(e)}", exc_info=True)
            await self.close()

    async def disconnect(self, close_code):
        group_name = getattr(self, 'group_name', None)
        if not group_name:
            return
        try:
            await self.channel_layer.group_discard(
                group_name,
                self.channel_name
            )
            logger.info(f"Progress socket closed for upload {self.upload_id}")
        except Exception as e:
            logger.error(f"Error in progress socket disconnect: {str(e)}", exc_info=True)

    async def receive(self, text_data=None, bytes_data=None):
        # Browsers only listen on this socket
        logger.debug(f"Ignoring message on progress socket for upload {self.upload_id}")

    async def upload_progress(self, event):
        await self.send(text_data=json.dumps({
            'type': 'upload_progress',
            'upload_id': event['upload_id'],
            'progress': event['progress'],
            'stage': event['stage'],
        }))
