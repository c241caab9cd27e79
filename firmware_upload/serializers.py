from rest_framework import serializers
from .utils import format_file_size


class FirmwareRecordSerializer(serializers.Serializer):
    file_name = serializers.CharField(read_only=True)
    target_device = serializers.CharField(read_only=True)
    version = serializers.CharField(read_only=True)
    upload_date = serializers.CharField(read_only=True)
    size = serializers.IntegerField(read_only=True)
    size_display = serializers.SerializerMethodField()
    checksum = serializers.CharField(read_only=True)
    status = serializers.CharField(read_only=True)
    is_pending = serializers.BooleanField(read_only=True)

    def get_size_display(self, obj):
        return format_file_size(obj.size)


class UploadResultSerializer(serializers.Serializer):
    target_device = serializers.CharField(read_only=True)
    version = serializers.CharField(read_only=True)
    file_name = serializers.CharField(read_only=True)
    file_size = serializers.IntegerField(read_only=True)
    file_size_display = serializers.SerializerMethodField()
    checksum = serializers.CharField(read_only=True)
    file_url = serializers.CharField(read_only=True)
    uploaded_at = serializers.CharField(read_only=True)

    def get_file_size_display(self, obj):
        size = obj['file_size'] if isinstance(obj, dict) else obj.file_size
        return format_file_size(size)
