"""
MongoDB request audit log.

Every API request is recorded in the ``api_logs`` collection. MongoDB is
optional: when it is disabled or unreachable, logging calls are no-ops.
"""
import logging

from django.conf import settings
from django.utils import timezone
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError

logger = logging.getLogger(__name__)

# MongoDB client singleton
_mongo_client = None
_mongo_db = None
_mongo_available = None


def get_mongo_db():
    """Get MongoDB database instance (singleton pattern)."""
    global _mongo_client, _mongo_db, _mongo_available

    if not getattr(settings, 'REQUEST_LOGGING', True):
        return None

    # If we already know MongoDB is unavailable, return None
    if _mongo_available is False:
        return None

    if _mongo_db is None:
        try:
            _mongo_client = MongoClient(
                settings.MONGODB_URI,
                serverSelectionTimeoutMS=3000,
                connectTimeoutMS=3000
            )
            _mongo_client.admin.command('ping')
            _mongo_db = _mongo_client[settings.MONGODB_NAME]
            _mongo_available = True
            _ensure_indexes(_mongo_db)
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.warning("MongoDB connection failed, request logging disabled: %s", e)
            _mongo_available = False
            return None

    return _mongo_db


def reset_mongo():
    """Close the client and forget connection state."""
    global _mongo_client, _mongo_db, _mongo_available
    if _mongo_client is not None:
        _mongo_client.close()
    _mongo_client = _mongo_db = _mongo_available = None


def _ensure_indexes(db):
    try:
        api_logs = db.api_logs
        api_logs.create_index([("timestamp", -1)])
        api_logs.create_index([("endpoint", 1), ("timestamp", -1)])
        api_logs.create_index([("user_id", 1), ("timestamp", -1)])
        api_logs.create_index([("error", 1), ("timestamp", -1)])
    except PyMongoError as e:
        logger.warning("Error creating MongoDB indexes: %s", e)


def log_api_request(endpoint, method, user_id, request_params,
                    response_status, execution_time_ms, error=None):
    """
    Record one API request.

    Args:
        endpoint: request path
        method: HTTP method
        user_id: id of the authenticated account, or None
        request_params: query parameters (GET) or payload keys
        response_status: HTTP status code returned
        execution_time_ms: wall time spent handling the request
        error: service error tag when the request failed (NotFound, ...)
    """
    db = get_mongo_db()
    if db is None:
        return

    log_entry = {
        "endpoint": endpoint,
        "method": method,
        "user_id": user_id,
        "request_params": request_params,
        "response_status": response_status,
        "execution_time_ms": execution_time_ms,
        "timestamp": timezone.now(),
    }
    if error:
        log_entry["error"] = error

    try:
        db.api_logs.insert_one(log_entry)
    except PyMongoError as e:
        logger.warning("Error logging to MongoDB: %s", e)


def get_api_logs(limit=100, offset=0, endpoint=None, user_id=None,
                 status_code=None, method=None, error=None):
    """Return logged requests, newest first, filtered by the given fields."""
    db = get_mongo_db()
    if db is None:
        return []

    query = {}
    if endpoint:
        query["endpoint"] = endpoint
    if user_id:
        query["user_id"] = user_id
    if status_code:
        query["response_status"] = status_code
    if method:
        query["method"] = method.upper()
    if error:
        query["error"] = error

    try:
        cursor = db.api_logs.find(query).sort("timestamp", -1).skip(offset).limit(limit)
        result = []
        for log in cursor:
            log["_id"] = str(log["_id"])
            if hasattr(log.get("timestamp"), 'isoformat'):
                log["timestamp"] = log["timestamp"].isoformat()
            result.append(log)
        return result
    except PyMongoError as e:
        logger.warning("Error reading API logs: %s", e)
        return []


def is_mongodb_available():
    """Check if MongoDB is available."""
    if _mongo_available is not None:
        return _mongo_available

    get_mongo_db()
    return _mongo_available or False
