import os
from pathlib import Path
from django.urls import reverse_lazy  # type: ignore

from .config import database_from_url, load_config

BASE_DIR = Path(__file__).resolve().parent.parent

# Loaded once at import; refuses to start without a session secret or admin hash.
STUDIO = load_config()

SECRET_KEY = STUDIO.session_secret

# DEBUG defaults to True for dev; set DEBUG=0/false in production.
DEBUG = str(os.environ.get('DEBUG', '1')).lower() in {'1', 'true', 'yes'}

_env_allowed = os.environ.get('ALLOWED_HOSTS')
ALLOWED_HOSTS: list[str] = (
    [h for h in (_env_allowed.split() if _env_allowed else ['*']) if h]
)
# Trust HTTPS scheme from the reverse proxy in front of the shop server
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

# The public base URL is also the origin staff submit forms from.
CSRF_TRUSTED_ORIGINS = []
if STUDIO.base_url.startswith('https://'):
    CSRF_TRUSTED_ORIGINS.append(STUDIO.base_url)

INSTALLED_APPS = [
    # Listed before staticfiles so its runserver (default PORT) wins.
    'jobs',
    'gate',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'widget_tweaks',
    'csp',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.locale.LocaleMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'csp.middleware.CSPMiddleware',
    'STStudio.middleware.UpstreamFailureMiddleware',
]

# Uploaded photos are served from the blob store host; QR codes are data: URLs.
_img_sources = ["'self'", "data:", "blob:"]
if STUDIO.blob_backend == 's3':
    _img_sources.append(STUDIO.blob_public_url or "*.amazonaws.com")

# Content Security Policy settings for django-csp >= 4.0
CONTENT_SECURITY_POLICY = {
    "DIRECTIVES": {
        "default-src": ["'self'"],
        # Tailwind is pulled from its CDN by the templates
        "script-src": ["'self'", "'unsafe-inline'", "cdn.tailwindcss.com"],
        "style-src": ["'self'", "'unsafe-inline'"],
        "img-src": _img_sources,
        "connect-src": ["'self'"],
    }
}

ROOT_URLCONF = 'STStudio.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / "templates"],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'STStudio.context_processors.studio_context',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    }
]

WSGI_APPLICATION = 'STStudio.wsgi.application'
ASGI_APPLICATION = 'STStudio.asgi.application'

# Default DB is SQLite next to the project; DATABASE_URL overrides it.
DATABASES = {
    'default': database_from_url(
        os.environ.get('DATABASE_URL') or f"sqlite:///{BASE_DIR / 'db.sqlite3'}"
    ),
}

LANGUAGE_CODE = 'th'
TIME_ZONE = 'Asia/Bangkok'
USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'
STATICFILES_DIRS = [
    BASE_DIR / "static",
]
STATIC_ROOT = BASE_DIR / 'staticfiles'

# Local blob store target (STUDIO_BLOB_BACKEND=local)
MEDIA_URL = '/media/'
MEDIA_ROOT = Path(os.environ.get('MEDIA_ROOT') or BASE_DIR / 'media')

# Photos are staged to disk by the job service, keep Django from buffering big ones in memory.
FILE_UPLOAD_MAX_MEMORY_SIZE = 2 * 1024 * 1024
DATA_UPLOAD_MAX_MEMORY_SIZE = 20 * 1024 * 1024

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

SESSION_EXPIRE_AT_BROWSER_CLOSE = False
SESSION_COOKIE_AGE = 60 * 60 * 24 * 14  # 14 days
SESSION_COOKIE_HTTPONLY = True

LOGIN_URL = reverse_lazy("login")
LOGIN_REDIRECT_URL = reverse_lazy("dashboard")
LOGOUT_REDIRECT_URL = reverse_lazy("login")

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'plain': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'plain',
        },
    },
    'loggers': {
        'STStudio': {'handlers': ['console'], 'level': os.environ.get('STUDIO_LOG_LEVEL', 'INFO')},
        'jobs': {'handlers': ['console'], 'level': os.environ.get('STUDIO_LOG_LEVEL', 'INFO')},
        'gate': {'handlers': ['console'], 'level': os.environ.get('STUDIO_LOG_LEVEL', 'INFO')},
    },
}

# In DEBUG, send report-only header so development isn't blocked by CSP
if DEBUG:
    CONTENT_SECURITY_POLICY_REPORT_ONLY = CONTENT_SECURITY_POLICY
    CONTENT_SECURITY_POLICY = None

# --- Static files: enable WhiteNoise in production for robust static serving ---
if not DEBUG:
    # Insert WhiteNoise right after SecurityMiddleware
    idx = MIDDLEWARE.index('django.middleware.security.SecurityMiddleware')
    MIDDLEWARE.insert(idx + 1, 'whitenoise.middleware.WhiteNoiseMiddleware')
    STORAGES = {
        "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
        "staticfiles": {"BACKEND": "whitenoise.storage.CompressedStaticFilesStorage"},
    }
    SESSION_COOKIE_SECURE = STUDIO.base_url.startswith('https://')
    CSRF_COOKIE_SECURE = SESSION_COOKIE_SECURE
