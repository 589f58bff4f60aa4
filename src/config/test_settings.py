"""Settings used by the test-suite.

Provides the values production deliberately leaves without defaults and
swaps external services for in-process equivalents.
"""

import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-only-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")
os.environ.setdefault("REDIS_URL", "")

from config.settings import *  # noqa: E402,F401,F403

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "autocentral-tests",
    }
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
NOTIFICATION_EMAIL = "alerts@autocentral.test"

TELEGRAM_BOT_TOKEN = ""
TELEGRAM_CHAT_ID = ""
TWILIO_ACCOUNT_SID = ""
TWILIO_AUTH_TOKEN = ""

MEDIA_ROOT = tempfile.mkdtemp(prefix="autocentral-media-")

SESSION_COOKIE_SECURE = False
