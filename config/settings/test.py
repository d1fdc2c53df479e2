from .base import *  # noqa
from .base import BASE_DIR
from .base import REST_FRAMEWORK as BASE_REST_FRAMEWORK

# Test settings: force SQLite for reliability and speed under pytest
DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test_db.sqlite3",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Keep console email backend in tests (pytest-django swaps in locmem)
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"

# Run email side effects inline so tests can inspect the outbox
ORDER_EMAILS_ASYNC = False

GOOGLE_CLIENT_ID = "test-client-id.apps.googleusercontent.com"

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.InMemoryStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

# Relax throttling for tests to reduce flakiness
REST_FRAMEWORK = {**BASE_REST_FRAMEWORK}
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {
    scope: "10000/min" for scope in BASE_REST_FRAMEWORK.get("DEFAULT_THROTTLE_RATES", {})
}
