"""
Tests for core app.
Tests cover: Accounts and auth flow, error kinds, payload validation, keyed stores, seed command.
"""
from io import StringIO

from django.core.management import call_command
from django.test import SimpleTestCase, TestCase, override_settings
from django.contrib.auth import get_user_model
from rest_framework import serializers, status
from rest_framework.test import APITestCase

from core.exceptions import InvalidArgument, InvalidPayload, NotFound, ServiceError
from core.payloads import validate_payload
from core.storage import MemoryStore, ModelStore, Stores, get_stores, reset_stores
from riders.models import Rider

User = get_user_model()


# =============================================================================
# UNIT TESTS - Accounts
# =============================================================================

class AccountModelTests(TestCase):
    """Test account model constraints."""

    def test_create_user_with_email(self):
        user = User.objects.create_user(
            email='ops@example.com',
            password='testpass123',
            name='Ops'
        )

        self.assertEqual(user.email, 'ops@example.com')
        self.assertTrue(user.check_password('testpass123'))
        self.assertFalse(user.is_admin)
        self.assertTrue(user.is_active)

    def test_create_user_without_email_raises_error(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', password='test123', name='Test')

    def test_create_superuser(self):
        user = User.objects.create_superuser(
            email='admin@example.com',
            password='admin123',
            name='Admin'
        )

        self.assertTrue(user.is_superuser)
        self.assertTrue(user.is_staff)
        self.assertTrue(user.is_admin)

    def test_string_representation(self):
        user = User.objects.create_user(email='ops@example.com', password='x', name='Ops')
        self.assertEqual(str(user), 'ops@example.com')


class AuthenticationAPITests(APITestCase):
    """Integration tests for the caller authentication flow."""

    def test_register_returns_jwt_tokens(self):
        response = self.client.post('/api/register/', {
            'email': 'newops@example.com',
            'name': 'New Ops',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!'
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('access', response.data['tokens'])
        self.assertIn('refresh', response.data['tokens'])
        self.assertEqual(response.data['user']['email'], 'newops@example.com')

    def test_register_password_mismatch(self):
        response = self.client.post('/api/register/', {
            'email': 'newops@example.com',
            'name': 'New Ops',
            'password': 'SecurePass123!',
            'password_confirm': 'OtherPass123!'
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password_confirm', response.data)

    def test_full_auth_flow(self):
        """Register -> login -> access protected route."""
        User.objects.create_user(email='flow@example.com', password='FlowPass123!', name='Flow')

        login_response = self.client.post('/api/login/', {
            'email': 'flow@example.com',
            'password': 'FlowPass123!'
        }, format='json')
        self.assertEqual(login_response.status_code, status.HTTP_200_OK)

        token = login_response.data['tokens']['access']
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

        profile_response = self.client.get('/api/profile/')
        self.assertEqual(profile_response.status_code, status.HTTP_200_OK)
        self.assertEqual(profile_response.data['email'], 'flow@example.com')

    def test_login_invalid_credentials(self):
        User.objects.create_user(email='flow@example.com', password='FlowPass123!', name='Flow')

        response = self.client.post('/api/login/', {
            'email': 'flow@example.com',
            'password': 'wrong'
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_protected_route_without_token(self):
        response = self.client.get('/api/trains/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


# =============================================================================
# UNIT TESTS - Errors and payload validation
# =============================================================================

class ServiceErrorTests(SimpleTestCase):

    def test_tags_and_status_codes(self):
        self.assertEqual(NotFound('x').status_code, 404)
        self.assertEqual(InvalidPayload('x').status_code, 400)
        self.assertEqual(InvalidArgument('x').status_code, 400)
        self.assertEqual(NotFound('x').as_dict(), {'error': 'NotFound', 'message': 'x'})

    def test_invalid_argument_is_an_invalid_payload(self):
        self.assertTrue(issubclass(InvalidArgument, InvalidPayload))
        self.assertFalse(issubclass(NotFound, InvalidPayload))
        self.assertTrue(issubclass(NotFound, ServiceError))

    def test_details_only_rendered_when_present(self):
        error = InvalidArgument('bad', details={'name': ['required']})
        self.assertEqual(error.as_dict()['details'], {'name': ['required']})


class SamplePayloadSerializer(serializers.Serializer):
    name = serializers.CharField()
    count = serializers.IntegerField(min_value=1)


class ValidatePayloadTests(SimpleTestCase):

    def test_empty_payload_rejected(self):
        with self.assertRaises(InvalidArgument):
            validate_payload(SamplePayloadSerializer, {})

    def test_non_mapping_payload_rejected(self):
        with self.assertRaises(InvalidArgument):
            validate_payload(SamplePayloadSerializer, ['name'])

    def test_field_errors_become_details(self):
        with self.assertRaises(InvalidArgument) as ctx:
            validate_payload(SamplePayloadSerializer, {'name': 'x', 'count': 0})
        self.assertIn('count', ctx.exception.details)
        self.assertIn('count', ctx.exception.message)

    def test_valid_payload_returns_validated_data(self):
        data = validate_payload(SamplePayloadSerializer, {'name': 'x', 'count': '3'})
        self.assertEqual(data['count'], 3)


# =============================================================================
# UNIT TESTS - Keyed stores
# =============================================================================

def make_rider(rider_id='r1', name='Alice'):
    return Rider(id=rider_id, name=name, phone_number='5550101', email='alice@example.com', tickets=[])


class MemoryStoreTests(SimpleTestCase):

    def setUp(self):
        self.store = MemoryStore()

    def test_get_missing_returns_none(self):
        self.assertIsNone(self.store.get('missing'))

    def test_insert_then_get(self):
        rider = self.store.insert('r1', make_rider())
        self.assertIs(self.store.get('r1'), rider)
        self.assertIn('r1', self.store)
        self.assertEqual(len(self.store), 1)

    def test_insert_overwrites(self):
        self.store.insert('r1', make_rider(name='Alice'))
        self.store.insert('r1', make_rider(name='Alicia'))
        self.assertEqual(len(self.store), 1)
        self.assertEqual(self.store.get('r1').name, 'Alicia')

    def test_remove(self):
        self.store.insert('r1', make_rider())
        self.assertTrue(self.store.remove('r1'))
        self.assertFalse(self.store.remove('r1'))
        self.assertEqual(self.store.values(), [])

    def test_find_by_field(self):
        self.store.insert('r1', make_rider(name='Alice'))
        self.store.insert('r2', make_rider(rider_id='r2', name='Bram'))
        self.assertEqual(self.store.find(name='Bram').id, 'r2')
        self.assertIsNone(self.store.find(name='Cleo'))


class ModelStoreTests(TestCase):

    def setUp(self):
        self.store = ModelStore(Rider)

    def test_get_missing_returns_none(self):
        self.assertIsNone(self.store.get('missing'))

    def test_insert_persists(self):
        self.store.insert('r1', make_rider())
        self.assertTrue(Rider.objects.filter(pk='r1').exists())
        self.assertEqual(self.store.get('r1').name, 'Alice')

    def test_insert_overwrites(self):
        self.store.insert('r1', make_rider(name='Alice'))
        self.store.insert('r1', make_rider(name='Alicia'))
        self.assertEqual(len(self.store), 1)
        self.assertEqual(self.store.get('r1').name, 'Alicia')

    def test_remove(self):
        self.store.insert('r1', make_rider())
        self.assertTrue(self.store.remove('r1'))
        self.assertFalse(self.store.remove('r1'))
        self.assertNotIn('r1', self.store)

    def test_find_by_field(self):
        self.store.insert('r1', make_rider(name='Alice'))
        self.assertEqual(self.store.find(email='alice@example.com').id, 'r1')
        self.assertIsNone(self.store.find(name='Cleo'))

    def test_get_for_update_inside_atomic(self):
        self.store.insert('r1', make_rider())
        stores = Stores.persistent()
        with stores.atomic():
            self.assertEqual(stores.users.get('r1', for_update=True).id, 'r1')


class GetStoresTests(SimpleTestCase):

    def setUp(self):
        reset_stores()
        self.addCleanup(reset_stores)

    @override_settings(RAILBOOK_STORAGE='memory')
    def test_memory_backend(self):
        stores = get_stores()
        self.assertIsInstance(stores.trains, MemoryStore)
        self.assertIs(get_stores(), stores)

    @override_settings(RAILBOOK_STORAGE='database')
    def test_database_backend(self):
        self.assertIsInstance(get_stores().tickets, ModelStore)

    @override_settings(RAILBOOK_STORAGE='tape')
    def test_unknown_backend(self):
        with self.assertRaises(ValueError):
            get_stores()


# =============================================================================
# INTEGRATION TESTS - seed_db
# =============================================================================

class SeedCommandTests(TestCase):

    def test_seed_db_populates_stores(self):
        call_command('seed_db', stdout=StringIO())

        stores = Stores.persistent()
        self.assertEqual(len(stores.operators), 1)
        self.assertEqual(len(stores.trains), 3)
        self.assertEqual(len(stores.users), 2)
        self.assertEqual(len(stores.tickets), 1)

        booked = [train for train in stores.trains.values() if train.booked_seats]
        self.assertEqual(len(booked), 1)
        self.assertEqual(booked[0].booked_seats, 2)

    def test_seed_db_twice_does_not_duplicate(self):
        call_command('seed_db', stdout=StringIO())
        call_command('seed_db', stdout=StringIO())

        stores = Stores.persistent()
        self.assertEqual(len(stores.operators), 1)
        self.assertEqual(len(stores.trains), 3)
        self.assertEqual(len(stores.users), 2)
        self.assertEqual(len(stores.tickets), 1)
