"""
Tests for bookings app (the ticket ledger).
Tests cover: Booking flow, seat bookkeeping invariants, ticket info join, cancellation, API.
"""
from datetime import timedelta

from django.test import SimpleTestCase, TestCase
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APITestCase
from rest_framework import status

from core.exceptions import InvalidArgument, InvalidPayload, NotFound
from core.storage import Stores
from bookings.models import Ticket
from bookings.services import cancel_ticket, create_ticket, get_ticket_info, list_tickets
from operators.services import add_operator
from riders.services import add_user, get_user
from trains.models import Train
from trains.services import add_train, get_train

User = get_user_model()


def future(days=7):
    return (timezone.now() + timedelta(days=days)).isoformat()


class LedgerFixtureMixin:
    """Registers NorthRail, a 10-seat train and Alice on ``self.stores``."""

    def build_ledger(self, caller):
        add_operator(self.stores, {'name': 'NorthRail', 'phone_number': '5550100'}, caller=caller)
        self.train = add_train(self.stores, {
            'name': 'Northern Express',
            'operator': 'NorthRail',
            'departure_time': future(),
            'arrival_time': future(8),
            'time_taken': '5h40m',
            'price': 4500,
            'available_seats': 10,
        })
        self.user = add_user(self.stores, {
            'name': 'Alice', 'phone_number': '5550101', 'email': 'alice@example.com'
        })

    def book(self, seats=3, **overrides):
        payload = {'train_id': self.train.id, 'user_id': self.user.id, 'number_of_seats': seats}
        payload.update(overrides)
        return create_ticket(self.stores, payload)

    def seats(self):
        train = get_train(self.stores, self.train.id)
        return train.available_seats, train.booked_seats

    def ticket_ids(self):
        return get_user(self.stores, self.user.id).tickets


class BookingFlowMixin(LedgerFixtureMixin):
    """Service behaviour shared by both store backends."""

    def test_booking_scenario(self):
        info = self.book(3)
        self.assertEqual(self.seats(), (7, 3))

        cancelled = cancel_ticket(self.stores, {'ticket_id': info['id'], 'user_id': self.user.id})
        self.assertEqual(cancelled, {'ticket_id': info['id'], 'user_id': self.user.id})
        self.assertEqual(self.seats(), (10, 0))

        with self.assertRaises(NotFound):
            get_ticket_info(self.stores, info['id'])

    def test_seat_total_invariant(self):
        tickets = [self.book(n)['id'] for n in (1, 2, 4)]
        available, booked = self.seats()
        self.assertEqual((available, booked), (3, 7))

        for ticket_id in tickets[:2]:
            cancel_ticket(self.stores, {'ticket_id': ticket_id, 'user_id': self.user.id})
            self.assertEqual(sum(self.seats()), 10)
        self.assertEqual(self.seats(), (6, 4))

    def test_booking_adds_ticket_once_and_cancel_removes_it(self):
        info = self.book(2)
        self.assertEqual(self.ticket_ids().count(info['id']), 1)

        cancel_ticket(self.stores, {'ticket_id': info['id'], 'user_id': self.user.id})
        self.assertNotIn(info['id'], self.ticket_ids())

    def test_ticket_info_matches_train_and_user(self):
        info = self.book(2)
        self.assertEqual(get_ticket_info(self.stores, info['id']), info)

        self.assertEqual(info['train_id'], self.train.id)
        self.assertEqual(info['user_id'], self.user.id)
        self.assertEqual(info['price'], 4500)
        self.assertEqual(info['departure_time'], self.train.departure_time)
        self.assertEqual(info['arrival_time'], self.train.arrival_time)
        self.assertEqual(info['time_taken'], '5h40m')
        self.assertEqual(info['user_name'], 'Alice')
        self.assertEqual(info['user_phone_number'], '5550101')
        self.assertEqual(info['number_of_seats'], 2)

    def test_overbooking_rejected(self):
        self.book(8)

        with self.assertRaises(InvalidPayload) as ctx:
            self.book(3)
        self.assertNotIsInstance(ctx.exception, InvalidArgument)
        self.assertEqual(self.seats(), (2, 8))
        self.assertEqual(len(list_tickets(self.stores)), 1)

    def test_booking_all_remaining_seats(self):
        self.book(10)
        self.assertEqual(self.seats(), (0, 10))

        with self.assertRaises(InvalidPayload):
            self.book(1)

    def test_departed_train_rejected(self):
        departed = add_train(self.stores, {
            'name': 'Yesterday Express',
            'operator': 'NorthRail',
            'departure_time': (timezone.now() - timedelta(days=1)).isoformat(),
            'arrival_time': future(0),
            'time_taken': '1h',
            'price': 100,
            'available_seats': 5,
        })

        with self.assertRaises(InvalidPayload):
            self.book(1, train_id=departed.id)

        departed = get_train(self.stores, departed.id)
        self.assertEqual((departed.available_seats, departed.booked_seats), (5, 0))
        self.assertEqual(list_tickets(self.stores), [])
        self.assertEqual(self.ticket_ids(), [])

    def test_unknown_user_or_train(self):
        with self.assertRaises(NotFound):
            self.book(1, user_id='nobody')
        with self.assertRaises(NotFound):
            self.book(1, train_id='nothing')
        self.assertEqual(self.seats(), (10, 0))

    def test_malformed_booking_payload(self):
        with self.assertRaises(InvalidArgument):
            self.book(0)
        with self.assertRaises(InvalidArgument):
            create_ticket(self.stores, {})

    def test_cancel_missing_ticket(self):
        self.book(3)

        with self.assertRaises(NotFound):
            cancel_ticket(self.stores, {'ticket_id': 'missing', 'user_id': self.user.id})
        self.assertEqual(self.seats(), (7, 3))
        self.assertEqual(len(self.ticket_ids()), 1)
        self.assertEqual(len(list_tickets(self.stores)), 1)

    def test_cancel_by_other_user_rejected(self):
        info = self.book(3)
        other = add_user(self.stores, {'name': 'Bram', 'phone_number': '2', 'email': 'bram@example.com'})

        with self.assertRaises(NotFound):
            cancel_ticket(self.stores, {'ticket_id': info['id'], 'user_id': other.id})
        self.assertEqual(self.seats(), (7, 3))
        self.assertEqual(self.ticket_ids(), [info['id']])

    def test_cancel_twice(self):
        info = self.book(3)
        cancel_ticket(self.stores, {'ticket_id': info['id'], 'user_id': self.user.id})

        with self.assertRaises(NotFound):
            cancel_ticket(self.stores, {'ticket_id': info['id'], 'user_id': self.user.id})
        self.assertEqual(self.seats(), (10, 0))

    def test_cancel_ticket_missing_from_riders_list(self):
        info = self.book(3)
        user = get_user(self.stores, self.user.id)
        user.drop_ticket(info['id'])
        self.stores.users.insert(user.id, user)

        with self.assertRaises(NotFound):
            cancel_ticket(self.stores, {'ticket_id': info['id'], 'user_id': self.user.id})
        self.assertEqual(self.seats(), (7, 3))
        self.assertEqual(get_ticket_info(self.stores, info['id']), info)

    def test_oversized_seat_count_rejected(self):
        with self.assertRaises(InvalidArgument):
            self.book(2 ** 40)
        self.assertEqual(self.seats(), (10, 0))


class DatabaseBookingTests(BookingFlowMixin, TestCase):
    """Ticket ledger over the ORM-backed stores."""

    def setUp(self):
        self.stores = Stores.persistent()
        caller = User.objects.create_user(email='ops@northrail.example', password='x', name='Ops')
        self.build_ledger(caller)

    def test_records_persisted(self):
        info = self.book(3)

        ticket = Ticket.objects.get(pk=info['id'])
        self.assertEqual(ticket.number_of_seats, 3)
        self.assertEqual(Train.objects.get(pk=self.train.id).booked_seats, 3)


class MemoryBookingTests(BookingFlowMixin, SimpleTestCase):
    """Ticket ledger over in-memory stores; no database involved."""

    def setUp(self):
        self.stores = Stores.in_memory()
        caller = User(pk=1, email='ops@northrail.example', name='Ops')
        self.build_ledger(caller)


# =============================================================================
# INTEGRATION TESTS - Ticket API
# =============================================================================

class TicketAPITests(LedgerFixtureMixin, APITestCase):

    def setUp(self):
        self.stores = Stores.persistent()
        caller = User.objects.create_user(email='desk@example.com', password='x', name='Desk')
        self.build_ledger(caller)
        self.client.force_authenticate(user=caller)

    def post_booking(self, seats):
        return self.client.post('/api/tickets/', {
            'train_id': self.train.id, 'user_id': self.user.id, 'number_of_seats': seats
        }, format='json')

    def test_book_lookup_and_cancel(self):
        response = self.post_booking(3)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        ticket_id = response.data['id']
        self.assertEqual(response.data['user_name'], 'Alice')

        response = self.client.get(f'/api/tickets/{ticket_id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['price'], 4500)

        response = self.client.get(f'/api/trains/{self.train.id}/')
        self.assertEqual((response.data['available_seats'], response.data['booked_seats']), (7, 3))

        response = self.client.get('/api/tickets/')
        self.assertEqual(response.data['count'], 1)

        response = self.client.post('/api/tickets/cancel/', {
            'ticket_id': ticket_id, 'user_id': self.user.id
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'ticket_id': ticket_id, 'user_id': self.user.id})

        response = self.client.get(f'/api/tickets/{ticket_id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'NotFound')

    def test_overbooking_returns_400(self):
        with self.assertLogs('bookings.views', level='WARNING') as logs:
            response = self.post_booking(11)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'InvalidPayload')
        self.assertEqual(self.seats(), (10, 0))
        self.assertIn('InvalidPayload', logs.output[0])

    def test_cancel_missing_ticket_returns_404(self):
        response = self.client.post('/api/tickets/cancel/', {
            'ticket_id': 'missing', 'user_id': self.user.id
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_booking_unauthenticated(self):
        self.client.force_authenticate(user=None)
        response = self.post_booking(1)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
