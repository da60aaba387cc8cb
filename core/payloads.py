"""Payload validation shared by the service modules."""
from collections.abc import Mapping

from .exceptions import InvalidArgument


def validate_payload(serializer_class, payload):
    """
    Run a payload through its serializer and return the validated data.

    Raises InvalidArgument when the payload is empty, not a mapping, or fails
    field validation. The serializer's field errors are attached as details.
    """
    if not isinstance(payload, Mapping) or not payload:
        raise InvalidArgument('invalid payload')

    serializer = serializer_class(data=payload)
    if not serializer.is_valid():
        fields = ', '.join(sorted(serializer.errors))
        raise InvalidArgument(f"invalid payload: {fields}", details=serializer.errors)
    return serializer.validated_data
