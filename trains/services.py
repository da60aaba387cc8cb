"""Train catalog operations."""
import logging
import uuid

from django.db import IntegrityError

from core.exceptions import InvalidPayload, NotFound
from core.payloads import validate_payload
from operators.services import operator_for_principal

from .models import Train
from .serializers import TrainPayloadSerializer

logger = logging.getLogger(__name__)


def add_train(stores, payload, caller=None):
    """
    Add a train to the catalog.

    The operator is the one named in the payload, or else the operator
    registered by ``caller``. Train names are unique across the catalog.
    """
    data = validate_payload(TrainPayloadSerializer, payload)

    operator_name = data.get('operator')
    if operator_name:
        operator = stores.operators.get(operator_name)
        if operator is None:
            raise NotFound(f"Operator with name {operator_name} not found")
    else:
        operator = operator_for_principal(stores, caller)
        if operator is None:
            raise NotFound(f"No operator registered for {caller}")

    if stores.trains.find(name=data['name']) is not None:
        raise InvalidPayload(f"Train with name {data['name']} already exists")

    train = Train(
        id=str(uuid.uuid4()),
        operator=operator.name,
        name=data['name'],
        image=data['image'],
        departure_time=data['departure_time'],
        arrival_time=data['arrival_time'],
        time_taken=data['time_taken'],
        price=data['price'],
        available_seats=data['available_seats'],
        booked_seats=0,
    )
    try:
        with stores.atomic():
            stores.trains.insert(train.id, train)
    except IntegrityError:
        # Lost a race with a concurrent add of the same name.
        raise InvalidPayload(f"Train with name {train.name} already exists")
    logger.info("Added train %s (%s) for operator %s", train.name, train.id, operator.name)
    return train


def get_train(stores, train_id):
    train = stores.trains.get(train_id)
    if train is None:
        raise NotFound(f"Train with id {train_id} not found")
    return train


def list_trains(stores):
    return stores.trains.values()
