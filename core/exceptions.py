"""
Error kinds raised by the booking services.

Every failure is local to one operation and is raised before any store is
written, so catching one of these never leaves a partial update behind.
"""
from rest_framework import status


class ServiceError(Exception):
    """Base class for the closed set of service error kinds."""
    tag = 'ServiceError'
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def as_dict(self):
        data = {'error': self.tag, 'message': self.message}
        if self.details:
            data['details'] = self.details
        return data


class NotFound(ServiceError):
    """A key could not be resolved in its store."""
    tag = 'NotFound'
    status_code = status.HTTP_404_NOT_FOUND


class InvalidPayload(ServiceError):
    """A business rule rejected the request (departed train, seats exhausted, ...)."""
    tag = 'InvalidPayload'


class InvalidArgument(InvalidPayload):
    """The payload itself is empty or malformed."""
    tag = 'InvalidArgument'
