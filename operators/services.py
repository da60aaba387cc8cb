"""Operator registry operations."""
import logging

from core.exceptions import NotFound
from core.payloads import validate_payload

from .models import Operator
from .serializers import OperatorPayloadSerializer

logger = logging.getLogger(__name__)


def add_operator(stores, payload, caller):
    """
    Register an operator owned by ``caller``.

    Operators are keyed by name, so registering an existing name replaces
    the previous record.
    """
    data = validate_payload(OperatorPayloadSerializer, payload)
    operator = Operator(
        name=data['name'],
        principal=caller,
        address=data['address'],
        phone_number=data['phone_number'],
    )
    stores.operators.insert(operator.name, operator)
    logger.info("Registered operator %s for %s", operator.name, caller)
    return operator


def get_operator(stores, name):
    operator = stores.operators.get(name)
    if operator is None:
        raise NotFound(f"Operator with name {name} not found")
    return operator


def list_operators(stores):
    return stores.operators.values()


def operator_for_principal(stores, caller):
    """Return the first operator registered by ``caller``, or None."""
    if caller is None or caller.pk is None:
        return None
    return stores.operators.find(principal_id=caller.pk)
