"""User directory operations."""
import logging
import uuid

from core.payloads import validate_payload

from .models import Rider
from .serializers import RiderPayloadSerializer

logger = logging.getLogger(__name__)


def add_user(stores, payload):
    data = validate_payload(RiderPayloadSerializer, payload)
    rider = Rider(
        id=str(uuid.uuid4()),
        name=data['name'],
        phone_number=data['phone_number'],
        email=data['email'],
        tickets=[],
    )
    stores.users.insert(rider.id, rider)
    logger.info("Added user %s (%s)", rider.name, rider.id)
    return rider


def get_user(stores, user_id):
    """Return the rider with ``user_id``, or None when there is none."""
    return stores.users.get(user_id)


def list_users(stores):
    return stores.users.values()
