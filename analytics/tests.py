"""
Tests for the request audit log: MongoDB helpers, logging middleware, log viewer API.

MongoDB is mocked throughout; the RealMongoDB tests at the bottom run only
when a local server is reachable:
    docker run -d -p 27017:27017 --name mongodb-test mongo:latest
"""
import unittest
from unittest.mock import patch, MagicMock

from django.test import SimpleTestCase, TestCase, override_settings
from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status

import utils.mongo
from utils.mongo import get_api_logs, get_mongo_db, log_api_request, reset_mongo

User = get_user_model()


def is_mongodb_available():
    """Check if MongoDB is available for testing."""
    try:
        from pymongo import MongoClient
        client = MongoClient('mongodb://localhost:27017/', serverSelectionTimeoutMS=2000)
        client.admin.command('ping')
        client.close()
        return True
    except Exception:
        return False


requires_mongodb = unittest.skipUnless(
    is_mongodb_available(),
    "MongoDB is not available. Start MongoDB to run these tests."
)


# =============================================================================
# UNIT TESTS - MongoDB helpers (mocked)
# =============================================================================

class MongoHelperTests(SimpleTestCase):

    def test_log_api_request_inserts_entry(self):
        db = MagicMock()
        with patch('utils.mongo.get_mongo_db', return_value=db):
            log_api_request(
                endpoint='/api/tickets/',
                method='POST',
                user_id=1,
                request_params={'train_id': 't1'},
                response_status=400,
                execution_time_ms=12.5,
                error='InvalidPayload'
            )

        entry = db.api_logs.insert_one.call_args[0][0]
        self.assertEqual(entry['endpoint'], '/api/tickets/')
        self.assertEqual(entry['error'], 'InvalidPayload')
        self.assertEqual(entry['response_status'], 400)
        self.assertIn('timestamp', entry)

    def test_log_api_request_without_mongo_is_noop(self):
        with patch('utils.mongo.get_mongo_db', return_value=None):
            log_api_request('/api/trains/', 'GET', None, {}, 200, 1.0)

    def test_get_api_logs_builds_query(self):
        db = MagicMock()
        cursor = db.api_logs.find.return_value.sort.return_value.skip.return_value.limit.return_value
        cursor.__iter__.return_value = iter([{'_id': 'abc', 'endpoint': '/api/tickets/'}])

        with patch('utils.mongo.get_mongo_db', return_value=db):
            logs = get_api_logs(limit=10, endpoint='/api/tickets/', method='post', error='NotFound')

        db.api_logs.find.assert_called_once_with(
            {'endpoint': '/api/tickets/', 'method': 'POST', 'error': 'NotFound'}
        )
        self.assertEqual(logs, [{'_id': 'abc', 'endpoint': '/api/tickets/'}])

    def test_get_api_logs_without_mongo(self):
        with patch('utils.mongo.get_mongo_db', return_value=None):
            self.assertEqual(get_api_logs(), [])

    @override_settings(REQUEST_LOGGING=False)
    def test_request_logging_disabled(self):
        self.addCleanup(reset_mongo)
        with patch('utils.mongo.MongoClient') as client:
            self.assertIsNone(get_mongo_db())
        client.assert_not_called()


# =============================================================================
# INTEGRATION TESTS - Middleware
# =============================================================================

class APILoggingMiddlewareTests(APITestCase):

    def setUp(self):
        self.caller = User.objects.create_user(email='desk@example.com', password='x', name='Desk')
        self.client.force_authenticate(user=self.caller)

    def test_failed_request_logged_with_error_tag(self):
        with patch('utils.middleware.log_api_request') as log:
            response = self.client.get('/api/trains/missing/')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        kwargs = log.call_args.kwargs
        self.assertEqual(kwargs['endpoint'], '/api/trains/missing/')
        self.assertEqual(kwargs['error'], 'NotFound')
        self.assertEqual(kwargs['user_id'], self.caller.id)

    def test_passwords_not_logged(self):
        with patch('utils.middleware.log_api_request') as log:
            self.client.post('/api/login/', {'email': 'desk@example.com', 'password': 'x'}, format='json')

        self.assertNotIn('password', log.call_args.kwargs['request_params'])
        self.assertEqual(log.call_args.kwargs['request_params']['email'], 'desk@example.com')

    def test_log_viewer_not_logged(self):
        with patch('utils.middleware.log_api_request') as log:
            self.client.get('/api/analytics/logs/')
        log.assert_not_called()

    def test_logging_failure_does_not_break_response(self):
        with patch('utils.middleware.log_api_request', side_effect=RuntimeError('boom')):
            response = self.client.get('/api/trains/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)


# =============================================================================
# INTEGRATION TESTS - Log viewer API
# =============================================================================

class APILogsViewTests(APITestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='user@example.com', password='x', name='User')
        self.admin = User.objects.create_user(email='admin@example.com', password='x', name='Admin', is_admin=True)

    def test_regular_user_forbidden(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get('/api/analytics/logs/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_can_read_logs(self):
        self.client.force_authenticate(user=self.admin)
        with patch('analytics.views.is_mongodb_available', return_value=True), \
                patch('analytics.views.get_api_logs', return_value=[{'endpoint': '/api/tickets/'}]) as get_logs:
            response = self.client.get('/api/analytics/logs/', {'error': 'NotFound', 'limit': 5})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['limit'], 5)
        self.assertTrue(response.data['mongodb_available'])
        self.assertEqual(get_logs.call_args.kwargs['error'], 'NotFound')

    def test_unauthenticated(self):
        response = self.client.get('/api/analytics/logs/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


# =============================================================================
# REAL MONGODB INTEGRATION TESTS
# =============================================================================

@requires_mongodb
class RealMongoDBTests(TestCase):

    test_db_name = 'railbook_logs_test'

    def setUp(self):
        reset_mongo()
        self.addCleanup(reset_mongo)

    def test_log_and_read_back(self):
        with override_settings(MONGODB_URI='mongodb://localhost:27017/', MONGODB_NAME=self.test_db_name):
            db = get_mongo_db()
            self.addCleanup(db.client.drop_database, self.test_db_name)
            db.api_logs.delete_many({})

            log_api_request('/api/tickets/cancel/', 'POST', 1, {'ticket_id': 'x'}, 404, 3.2, error='NotFound')
            logs = get_api_logs(error='NotFound')

        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0]['endpoint'], '/api/tickets/cancel/')
        self.assertTrue(utils.mongo.is_mongodb_available())
