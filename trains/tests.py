"""
Tests for trains app.
Tests cover: Schedule parsing, seat inventory helpers, add/get/list trains, API.
"""
from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import patch

from django.test import SimpleTestCase, TestCase
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APITestCase
from rest_framework import status

from core.exceptions import InvalidArgument, InvalidPayload, NotFound
from core.storage import Stores
from operators.services import add_operator
from trains.models import Train, parse_timestamp
from trains.services import add_train, get_train, list_trains

User = get_user_model()


def future(days=7):
    return (timezone.now() + timedelta(days=days)).isoformat()


def train_payload(**overrides):
    payload = {
        'name': 'Northern Express',
        'operator': 'NorthRail',
        'image': 'https://example.com/northern.png',
        'departure_time': future(),
        'arrival_time': future(8),
        'time_taken': '5h40m',
        'price': 4500,
        'available_seats': 10,
    }
    payload.update(overrides)
    return payload


# UNIT TESTS - Models

class ParseTimestampTests(SimpleTestCase):

    def test_aware_datetime(self):
        parsed = parse_timestamp('2030-01-15T08:30:00+00:00')
        self.assertEqual(parsed, datetime(2030, 1, 15, 8, 30, tzinfo=dt_timezone.utc))

    def test_naive_datetime_made_aware(self):
        parsed = parse_timestamp('2030-01-15 08:30:00')
        self.assertTrue(timezone.is_aware(parsed))

    def test_bare_date_is_midnight(self):
        parsed = parse_timestamp('2030-01-15')
        self.assertEqual((parsed.hour, parsed.minute), (0, 0))

    def test_garbage_returns_none(self):
        self.assertIsNone(parse_timestamp('next tuesday'))
        self.assertIsNone(parse_timestamp('2030-13-45T99:00:00'))
        self.assertIsNone(parse_timestamp(''))


class TrainModelTests(SimpleTestCase):

    def setUp(self):
        self.train = Train(id='t1', operator='NorthRail', name='Northern Express',
                           departure_time=future(), arrival_time=future(8), time_taken='5h',
                           price=100, available_seats=10, booked_seats=0)

    def test_book_and_release_keep_total(self):
        self.train.book(3)
        self.assertEqual((self.train.available_seats, self.train.booked_seats), (7, 3))
        self.assertEqual(self.train.total_seats, 10)

        self.train.release(3)
        self.assertEqual((self.train.available_seats, self.train.booked_seats), (10, 0))

    def test_can_book(self):
        self.assertTrue(self.train.can_book(10))
        self.assertFalse(self.train.can_book(11))
        self.assertFalse(self.train.can_book(0))

    def test_departs_at(self):
        self.assertGreater(self.train.departs_at(), timezone.now())


# UNIT TESTS - Services

class TrainServiceTests(TestCase):

    def setUp(self):
        self.stores = Stores.persistent()
        self.caller = User.objects.create_user(email='ops@northrail.example', password='x', name='Ops')
        add_operator(self.stores, {'name': 'NorthRail', 'phone_number': '5550100'}, caller=self.caller)

    def test_add_train(self):
        train = add_train(self.stores, train_payload(), caller=self.caller)

        self.assertEqual(train.operator, 'NorthRail')
        self.assertEqual(train.booked_seats, 0)
        self.assertEqual(train.available_seats, 10)
        self.assertEqual(get_train(self.stores, train.id).name, 'Northern Express')

    def test_operator_defaults_to_callers_operator(self):
        payload = train_payload()
        del payload['operator']

        train = add_train(self.stores, payload, caller=self.caller)
        self.assertEqual(train.operator, 'NorthRail')

    def test_caller_without_operator(self):
        stranger = User.objects.create_user(email='x@example.com', password='x', name='X')
        payload = train_payload()
        del payload['operator']

        with self.assertRaises(NotFound):
            add_train(self.stores, payload, caller=stranger)

    def test_unknown_operator(self):
        with self.assertRaises(NotFound):
            add_train(self.stores, train_payload(operator='GhostRail'), caller=self.caller)
        self.assertEqual(Train.objects.count(), 0)

    def test_duplicate_name_rejected(self):
        add_train(self.stores, train_payload(), caller=self.caller)

        with self.assertRaises(InvalidPayload) as ctx:
            add_train(self.stores, train_payload(), caller=self.caller)
        self.assertNotIsInstance(ctx.exception, InvalidArgument)
        self.assertEqual(len(list_trains(self.stores)), 1)

    def test_empty_payload_rejected(self):
        with self.assertRaises(InvalidPayload):
            add_train(self.stores, {}, caller=self.caller)

    def test_malformed_payload_rejected(self):
        with self.assertRaises(InvalidArgument):
            add_train(self.stores, train_payload(departure_time='soon'), caller=self.caller)
        with self.assertRaises(InvalidArgument):
            add_train(self.stores, train_payload(available_seats=-1), caller=self.caller)

    def test_oversized_numbers_rejected(self):
        with self.assertRaises(InvalidArgument):
            add_train(self.stores, train_payload(available_seats=2 ** 31), caller=self.caller)
        with self.assertRaises(InvalidArgument):
            add_train(self.stores, train_payload(price=2 ** 63), caller=self.caller)
        self.assertEqual(Train.objects.count(), 0)

    def test_concurrent_duplicate_name_rejected(self):
        add_train(self.stores, train_payload(), caller=self.caller)

        # Second add misses the first one in its lookup, as a racing request would.
        with patch.object(self.stores.trains, 'find', return_value=None):
            with self.assertRaises(InvalidPayload):
                add_train(self.stores, train_payload(), caller=self.caller)
        self.assertEqual(Train.objects.count(), 1)

    def test_booked_seats_in_payload_ignored(self):
        train = add_train(self.stores, train_payload(booked_seats=5), caller=self.caller)
        self.assertEqual(train.booked_seats, 0)

    def test_get_missing_train(self):
        with self.assertRaises(NotFound):
            get_train(self.stores, 'no-such-train')


# INTEGRATION TESTS - Train API

class TrainAPITests(APITestCase):

    def setUp(self):
        self.caller = User.objects.create_user(email='ops@northrail.example', password='x', name='Ops')
        self.client.force_authenticate(user=self.caller)
        self.client.post('/api/operators/', {'name': 'NorthRail', 'phone_number': '5550100'}, format='json')

    def test_add_and_get_train(self):
        response = self.client.post('/api/trains/', train_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        train_id = response.data['id']
        self.assertEqual(response.data['booked_seats'], 0)

        response = self.client.get(f'/api/trains/{train_id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['operator'], 'NorthRail')

        response = self.client.get('/api/trains/')
        self.assertEqual(response.data['count'], 1)

    def test_unknown_operator_returns_404(self):
        with self.assertLogs('trains.views', level='WARNING') as logs:
            response = self.client.post('/api/trains/', train_payload(operator='GhostRail'), format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'NotFound')
        self.assertIn('NotFound', logs.output[0])
        self.assertIn('GhostRail', logs.output[0])

    def test_oversized_price_returns_400(self):
        response = self.client.post('/api/trains/', train_payload(price=2 ** 70), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'InvalidArgument')
        self.assertIn('price', response.data['details'])
        self.assertEqual(Train.objects.count(), 0)

    def test_duplicate_name_returns_400(self):
        self.client.post('/api/trains/', train_payload(), format='json')
        response = self.client.post('/api/trains/', train_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'InvalidPayload')

    def test_missing_train_returns_404(self):
        response = self.client.get('/api/trains/nope/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_unauthenticated(self):
        self.client.force_authenticate(user=None)
        response = self.client.get('/api/trains/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
