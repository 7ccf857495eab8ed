import os, sys
from django.contrib.contenttypes.models import ContentType
from scholarspace.action_logs.models.action_log import ActionLog, SYSTEM_USER_TAG
from django.db import transaction
import threading
import logging
from django.conf import settings
import json
from decimal import Decimal
from datetime import date, datetime

logger = logging.getLogger(__name__)

# Global flag for test mode - can be set by tests
_TEST_MODE = False


def set_test_mode(enabled=True):
    """Set test mode for action logging - use this in your test setup"""
    global _TEST_MODE
    _TEST_MODE = enabled


def _test_mode_enabled():
    return _TEST_MODE or getattr(settings, "ACTION_LOG_TEST_MODE", False)


class CustomJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal, date, datetime and model instances"""

    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        elif isinstance(obj, (date, datetime)):
            return obj.isoformat()
        elif hasattr(obj, "pk"):  # Model instance
            return {"model": obj.__class__.__name__, "id": obj.pk, "str": str(obj)}
        return super().default(obj)


def _serialise_metadata(action, metadata):
    if not metadata:
        return {}
    try:
        return json.loads(json.dumps(metadata, cls=CustomJSONEncoder))
    except (TypeError, ValueError) as e:
        logger.warning(f"Failed to serialize metadata: {str(e)}")
        processed = {
            "error": "Failed to serialize metadata",
            "original_action": action,
        }
        for key, value in metadata.items():
            if isinstance(value, (int, float, str, bool, type(None))):
                processed[key] = value
            else:
                processed[key] = str(value)
        return processed


def log_action(user, action, category, obj=None, metadata=None):
    """
    Record an audit entry. Never raises: a failed log must not undo the
    operation being logged.
    """
    # Skip under `manage.py test` unless a test opted in
    if not _test_mode_enabled() and ("test" in sys.argv or "TEST" in os.environ):
        return None

    if user is not None and not user.pk:
        # Unsaved users cannot be referenced
        return None

    try:
        content_type = None
        object_id = None
        if obj is not None and obj.pk:
            content_type = ContentType.objects.get_for_model(obj)
            object_id = obj.pk

        return ActionLog.objects.create(
            user=user,
            user_tag=user.user_tag if user else SYSTEM_USER_TAG,
            action=action[:255],
            category=category,
            content_type=content_type,
            object_id=object_id,
            metadata=_serialise_metadata(action, metadata),
        )
    except Exception as e:
        logger.warning(f"Failed to create action log: {str(e)}")
        return None


def log_action_async(user, action, category, obj=None, metadata=None):
    """
    Non-blocking action logger for high-frequency operations.
    Queues the log to be created after the current transaction succeeds.
    """

    def create_log():
        log_action(user, action, category, obj, metadata)

    # In test mode, always execute synchronously regardless of transaction state
    if _test_mode_enabled():
        create_log()
        return

    if transaction.get_autocommit():
        thread = threading.Thread(target=create_log)
        thread.daemon = True
        thread.start()
    else:
        transaction.on_commit(create_log)


def log_system_action(action, category, obj=None, metadata=None):
    """Log system operations without user context"""
    return log_action(
        user=None,
        action=action,
        category=category,
        obj=obj,
        metadata={"system_operation": True, **(metadata or {})},
    )
