"""
Django Test Settings for AgentSpace Scoreboard Backend

Uses an SQLite in-memory database by default for fast testing; set
TEST_DB_ENGINE=django.db.backends.postgresql to run against PostgreSQL.
Unmanaged models are switched to managed=True by the root conftest.py so
Django can create their tables.
"""
from .base import *  # noqa: F401, F403

# =============================================================================
# Debug Mode for Tests
# =============================================================================

DEBUG = False

# =============================================================================
# Database
# =============================================================================

TEST_DB_ENGINE = config('TEST_DB_ENGINE', default='django.db.backends.sqlite3')  # noqa: F405

if TEST_DB_ENGINE == 'django.db.backends.sqlite3':
    DATABASES = {
        'default': {
            'ENGINE': TEST_DB_ENGINE,
            'NAME': ':memory:',
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': TEST_DB_ENGINE,
            'NAME': config('TEST_DB_NAME', default='agentspace_test'),  # noqa: F405
            'USER': config('TEST_DB_USER', default='postgres'),  # noqa: F405
            'PASSWORD': config('TEST_DB_PASSWORD', default='postgres'),  # noqa: F405
            'HOST': config('TEST_DB_HOST', default='localhost'),  # noqa: F405
            'PORT': config('TEST_DB_PORT', default='5432'),  # noqa: F405
            'OPTIONS': {},
        }
    }

# =============================================================================
# Speed Optimizations for Tests
# =============================================================================

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Disable logging during tests
LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'CRITICAL',
    },
}

# =============================================================================
# Supabase Mock Configuration
# =============================================================================

SUPABASE_URL = 'http://localhost:54321'
SUPABASE_JWT_SECRET = 'test-jwt-secret-key-for-testing-purposes-only'

# =============================================================================
# CORS - Allow all for tests
# =============================================================================

CORS_ALLOW_ALL_ORIGINS = True
