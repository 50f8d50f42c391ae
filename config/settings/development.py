"""
Django Development Settings

Use these settings against a local Supabase stack (`supabase start`) and the
Next.js dev server. Scoreboard windows are resolved in TIME_ZONE, so set it
to the agency's zone to reproduce week boundaries seen in production.
"""
from .base import *  # noqa: F401, F403

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# =============================================================================
# Local Supabase - tokens are issued by the CLI stack on port 54321
# =============================================================================

SUPABASE_URL = config('NEXT_PUBLIC_SUPABASE_URL', default='http://127.0.0.1:54321')  # noqa: F405

DATABASES['default'].update({  # noqa: F405
    'HOST': config('SUPABASE_DB_HOST', default='127.0.0.1'),  # noqa: F405
    'PORT': config('SUPABASE_DB_PORT', default='54322'),  # noqa: F405
})
DATABASES['default']['OPTIONS']['sslmode'] = config(  # noqa: F405
    'SUPABASE_DB_SSLMODE',
    default='disable'
)

# =============================================================================
# CORS - Next.js dev server only
# =============================================================================

CORS_ALLOWED_ORIGINS = [
    'http://localhost:3000',
    'http://127.0.0.1:3000',
]

# =============================================================================
# Logging - scoreboard summaries and downline resolution at DEBUG
# =============================================================================

LOGGING = LOGGING.copy()  # noqa: F405  # type: ignore[name-defined]
LOGGING['root']['level'] = 'DEBUG'  # type: ignore[index]
LOGGING['loggers']['apps']['level'] = 'DEBUG'  # type: ignore[index]
LOGGING['loggers']['services']['level'] = 'DEBUG'  # type: ignore[index]
