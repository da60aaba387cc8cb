"""
Ticket ledger operations: booking, lookup and cancellation.

Booking and cancellation each touch three records (train, ticket, rider).
All checks run before the first write and the writes share one
``stores.atomic()`` block, so ``available_seats + booked_seats`` on a train
never changes and a rider's ticket list always matches the ticket store.
"""
import logging
import uuid

from django.utils import timezone

from core.exceptions import InvalidPayload, NotFound
from core.payloads import validate_payload

from .models import Ticket
from .serializers import TicketPayloadSerializer, CancelTicketSerializer

logger = logging.getLogger(__name__)


def ticket_info(ticket, train, user):
    """Join a ticket with its train schedule and rider contact details."""
    return {
        'id': ticket.id,
        'train_id': train.id,
        'user_id': user.id,
        'departure_time': train.departure_time,
        'arrival_time': train.arrival_time,
        'time_taken': train.time_taken,
        'price': train.price,
        'number_of_seats': ticket.number_of_seats,
        'user_name': user.name,
        'user_phone_number': user.phone_number,
    }


def create_ticket(stores, payload):
    """
    Book ``number_of_seats`` seats on a train for a rider.

    Raises NotFound for an unknown rider or train, and InvalidPayload when
    the train has departed or does not have enough seats left.
    """
    data = validate_payload(TicketPayloadSerializer, payload)
    num_seats = data['number_of_seats']

    with stores.atomic():
        user = stores.users.get(data['user_id'], for_update=True)
        if user is None:
            raise NotFound(f"User with id {data['user_id']} not found")

        train = stores.trains.get(data['train_id'], for_update=True)
        if train is None:
            raise NotFound(f"Train with id {data['train_id']} not found")

        ticket_id = str(uuid.uuid4())

        departure = train.departs_at()
        if departure is None:
            raise InvalidPayload(f"Train with id {train.id} has no valid departure time")
        if departure < timezone.now():
            raise InvalidPayload(f"Train with id {train.id} has already departed")

        # Only ever true on an id collision; see DESIGN.md.
        if user.holds(ticket_id):
            raise InvalidPayload(f"User with id {user.id} already booked a ticket for train {train.id}")

        if not train.can_book(num_seats):
            raise InvalidPayload(
                f"Only {train.available_seats} seats available on train {train.id}, "
                f"{num_seats} requested"
            )

        train.book(num_seats)
        stores.trains.insert(train.id, train)

        ticket = Ticket(id=ticket_id, train_id=train.id, user_id=user.id, number_of_seats=num_seats)
        stores.tickets.insert(ticket.id, ticket)

        user.add_ticket(ticket.id)
        stores.users.insert(user.id, user)

    logger.info("Booked %s seat(s) on train %s for user %s (ticket %s)",
                num_seats, train.id, user.id, ticket.id)
    return ticket_info(ticket, train, user)


def list_tickets(stores):
    return stores.tickets.values()


def get_ticket_info(stores, ticket_id):
    ticket = stores.tickets.get(ticket_id)
    if ticket is None:
        raise NotFound(f"Ticket with id {ticket_id} not found")

    train = stores.trains.get(ticket.train_id)
    if train is None:
        raise NotFound(f"Train with id {ticket.train_id} not found")

    user = stores.users.get(ticket.user_id)
    if user is None:
        raise NotFound(f"User with id {ticket.user_id} not found")

    return ticket_info(ticket, train, user)


def cancel_ticket(stores, payload):
    """
    Cancel a ticket held by a rider and return its seats to the train.

    Returns the ticket and user ids that were cancelled.
    """
    data = validate_payload(CancelTicketSerializer, payload)

    with stores.atomic():
        ticket = stores.tickets.get(data['ticket_id'], for_update=True)
        if ticket is None:
            raise NotFound(f"Ticket with id {data['ticket_id']} not found")

        user = stores.users.get(data['user_id'], for_update=True)
        if user is None:
            raise NotFound(f"User with id {data['user_id']} not found")
        if ticket.user_id != user.id or not user.holds(ticket.id):
            raise NotFound(f"Ticket with id {ticket.id} not found for user {user.id}")

        train = stores.trains.get(ticket.train_id, for_update=True)
        if train is None:
            raise NotFound(f"Train with id {ticket.train_id} not found")

        train.release(ticket.number_of_seats)
        stores.trains.insert(train.id, train)

        user.drop_ticket(ticket.id)
        stores.users.insert(user.id, user)

        stores.tickets.remove(ticket.id)

    logger.info("Cancelled ticket %s for user %s, released %s seat(s) on train %s",
                ticket.id, user.id, ticket.number_of_seats, train.id)
    return {'ticket_id': ticket.id, 'user_id': user.id}
