"""
Tests for riders app (the user directory).
"""
from django.test import SimpleTestCase, TestCase
from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status

from core.exceptions import InvalidArgument
from core.storage import Stores
from riders.models import Rider
from riders.services import add_user, get_user, list_users

User = get_user_model()


class RiderModelTests(SimpleTestCase):

    def test_ticket_list_has_no_duplicates(self):
        rider = Rider(id='r1', name='Alice', phone_number='1', email='a@example.com', tickets=[])
        rider.add_ticket('t1')
        rider.add_ticket('t1')
        rider.add_ticket('t2')
        self.assertEqual(rider.tickets, ['t1', 't2'])

        rider.drop_ticket('t1')
        self.assertEqual(rider.tickets, ['t2'])
        self.assertFalse(rider.holds('t1'))


class RiderServiceTests(TestCase):

    def setUp(self):
        self.stores = Stores.persistent()

    def test_add_user(self):
        rider = add_user(self.stores, {'name': 'Alice', 'phone_number': '5550101', 'email': 'alice@example.com'})

        self.assertEqual(rider.tickets, [])
        self.assertEqual(Rider.objects.get(pk=rider.id).name, 'Alice')

    def test_empty_payload_is_invalid_argument(self):
        with self.assertRaises(InvalidArgument):
            add_user(self.stores, {})
        self.assertEqual(Rider.objects.count(), 0)

    def test_bad_email_is_invalid_argument(self):
        with self.assertRaises(InvalidArgument):
            add_user(self.stores, {'name': 'Alice', 'phone_number': '1', 'email': 'not-an-email'})

    def test_get_user_is_optional(self):
        rider = add_user(self.stores, {'name': 'Alice', 'phone_number': '1', 'email': 'alice@example.com'})

        self.assertEqual(get_user(self.stores, rider.id).id, rider.id)
        self.assertIsNone(get_user(self.stores, 'missing'))

    def test_list_users(self):
        add_user(self.stores, {'name': 'Alice', 'phone_number': '1', 'email': 'alice@example.com'})
        add_user(self.stores, {'name': 'Bram', 'phone_number': '2', 'email': 'bram@example.com'})
        self.assertEqual({r.name for r in list_users(self.stores)}, {'Alice', 'Bram'})


class RiderAPITests(APITestCase):

    def setUp(self):
        self.caller = User.objects.create_user(email='desk@example.com', password='x', name='Desk')
        self.client.force_authenticate(user=self.caller)

    def test_add_and_get_user(self):
        response = self.client.post('/api/users/', {
            'name': 'Alice', 'phone_number': '5550101', 'email': 'alice@example.com'
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['tickets'], [])

        response = self.client.get(f"/api/users/{response.data['id']}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['name'], 'Alice')

    def test_missing_user_is_null(self):
        response = self.client.get('/api/users/missing/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['user'])

    def test_empty_payload_returns_400(self):
        response = self.client.post('/api/users/', {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'InvalidArgument')

    def test_list_users(self):
        self.client.post('/api/users/', {'name': 'Alice', 'phone_number': '1', 'email': 'a@example.com'}, format='json')
        response = self.client.get('/api/users/')
        self.assertEqual(response.data['count'], 1)
