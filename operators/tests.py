"""
Tests for operators app.
Tests cover: Registration, overwrite by name, lookup, API.
"""
from django.test import TestCase
from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status

from core.exceptions import InvalidArgument, NotFound
from core.storage import Stores
from operators.models import Operator
from operators.services import add_operator, get_operator, list_operators, operator_for_principal

User = get_user_model()


class OperatorServiceTests(TestCase):

    def setUp(self):
        self.stores = Stores.persistent()
        self.caller = User.objects.create_user(email='ops@northrail.example', password='x', name='Ops')
        self.other = User.objects.create_user(email='ops@southrail.example', password='x', name='Other')

    def test_add_operator_stamps_caller_as_principal(self):
        operator = add_operator(self.stores, {
            'name': 'NorthRail', 'address': '1 Station Rd', 'phone_number': '5550100'
        }, caller=self.caller)

        self.assertEqual(operator.principal, self.caller)
        stored = Operator.objects.get(pk='NorthRail')
        self.assertEqual(stored.principal_id, self.caller.id)
        self.assertEqual(stored.phone_number, '5550100')

    def test_registering_same_name_overwrites(self):
        add_operator(self.stores, {'name': 'NorthRail', 'phone_number': '5550100'}, caller=self.caller)
        add_operator(self.stores, {'name': 'NorthRail', 'phone_number': '5550199'}, caller=self.other)

        self.assertEqual(len(list_operators(self.stores)), 1)
        operator = get_operator(self.stores, 'NorthRail')
        self.assertEqual(operator.phone_number, '5550199')
        self.assertEqual(operator.principal_id, self.other.id)

    def test_get_missing_operator(self):
        with self.assertRaises(NotFound):
            get_operator(self.stores, 'GhostRail')

    def test_malformed_payload(self):
        with self.assertRaises(InvalidArgument):
            add_operator(self.stores, {}, caller=self.caller)
        with self.assertRaises(InvalidArgument):
            add_operator(self.stores, {'name': '   ', 'phone_number': '1'}, caller=self.caller)
        self.assertEqual(Operator.objects.count(), 0)

    def test_operator_for_principal(self):
        add_operator(self.stores, {'name': 'NorthRail', 'phone_number': '5550100'}, caller=self.caller)

        self.assertEqual(operator_for_principal(self.stores, self.caller).name, 'NorthRail')
        self.assertIsNone(operator_for_principal(self.stores, self.other))
        self.assertIsNone(operator_for_principal(self.stores, None))


class OperatorAPITests(APITestCase):

    def setUp(self):
        self.caller = User.objects.create_user(email='ops@northrail.example', password='x', name='Ops')
        self.client.force_authenticate(user=self.caller)

    def test_register_and_fetch_operator(self):
        response = self.client.post('/api/operators/', {
            'name': 'NorthRail', 'address': '1 Station Rd', 'phone_number': '5550100'
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['principal'], 'ops@northrail.example')

        response = self.client.get('/api/operators/NorthRail/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'NorthRail')

        response = self.client.get('/api/operators/')
        self.assertEqual(response.data['count'], 1)

    def test_missing_operator_returns_404(self):
        response = self.client.get('/api/operators/GhostRail/')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'NotFound')

    def test_invalid_payload_returns_400(self):
        response = self.client.post('/api/operators/', {'address': 'nowhere'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'InvalidArgument')
        self.assertIn('name', response.data['details'])
