"""DRF serializers for the restoration workflow.

This module includes:
- the upload policy serializer used to validate a selected file
- the serializer for the persisted `RestorationEntry` interchange format
"""

from django.conf import settings
from rest_framework import serializers

from restora.const import ACCEPTED_TYPES, MAX_FILE_SIZE
from restora.helpers import format_file_size
from restora.models import RestorationEntry
from restora.utils.exceptions import FileValidationError

UNSUPPORTED_TYPE_MESSAGE = "Please upload a JPG, PNG, or WEBP image."

MEGABYTE = 1024 * 1024

# Reason code per policy field, in the order violations are reported
ERROR_CODES = {
    "content_type": "unsupported_type",
    "size": "file_too_large",
}


def file_too_large_message(max_bytes: int = MAX_FILE_SIZE) -> str:
    if max_bytes % MEGABYTE == 0:
        limit = f"{max_bytes // MEGABYTE}MB"
    else:
        limit = format_file_size(max_bytes)
    return f"File size exceeds {limit} limit."


FILE_TOO_LARGE_MESSAGE = file_too_large_message()


def _max_upload_bytes() -> int:
    return getattr(settings, "RESTORA_MAX_UPLOAD_BYTES", MAX_FILE_SIZE)


class RestorationUploadSerializer(serializers.Serializer):
    """Serializer for a selected source file (declared type and byte size)

    The file name is not part of the policy. The declared type must match
    one of the accepted types exactly; content is never sniffed.
    """

    content_type = serializers.ChoiceField(
        choices=ACCEPTED_TYPES,
        error_messages={"invalid_choice": UNSUPPORTED_TYPE_MESSAGE},
    )
    size = serializers.IntegerField(min_value=0)

    def validate_size(self, value):
        max_bytes = _max_upload_bytes()
        if value > max_bytes:
            raise serializers.ValidationError(file_too_large_message(max_bytes), code="file_too_large")
        return value


def validate_source_file(source_file):
    """Apply the upload policy to `source_file`.

    Raises:
        FileValidationError: carrying the user-facing message and a reason code
    """
    serializer = RestorationUploadSerializer(
        data={
            "content_type": source_file.content_type or "",
            "size": source_file.size,
        }
    )
    if serializer.is_valid():
        return serializer.validated_data

    for field_name, code in ERROR_CODES.items():
        if field_name in serializer.errors:
            raise FileValidationError(str(serializer.errors[field_name][0]), code=code)


class RestorationEntrySerializer(serializers.Serializer):
    """Serializer for RestorationEntry (camelCase interchange keys)"""

    id = serializers.CharField()
    originalRef = serializers.CharField(source="original_ref", allow_blank=True)
    restoredRef = serializers.CharField(source="restored_ref")
    fileName = serializers.CharField(source="file_name", allow_blank=True)
    fileSizeBytes = serializers.IntegerField(source="file_size_bytes", min_value=0)
    analysisText = serializers.CharField(source="analysis_text", allow_blank=True, required=False, default="")
    timestamp = serializers.CharField()
    presets = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    aspectRatio = serializers.FloatField(source="aspect_ratio", required=False, allow_null=True, default=None)

    def create(self, validated_data):
        return RestorationEntry(**validated_data)
