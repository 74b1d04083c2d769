import os
from pathlib import Path

from dotenv import load_dotenv

# Load a local .env file when present
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('SECRET_KEY', 'django-insecure-change-me-before-deploying')
DEBUG = os.environ.get('DEBUG', 'True').lower() == 'true'
ALLOWED_HOSTS = os.environ.get('ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',')

# Application definition
DJANGO_APPS = [
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
]

LOCAL_APPS = [
    'website',
    'bookings',
]

INSTALLED_APPS = DJANGO_APPS + LOCAL_APPS

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'bookings.middleware.ReservationHeadersMiddleware',
]

ROOT_URLCONF = 'nails_studio.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'nails_studio.wsgi.application'

# Reservations are never persisted: no database is configured
DATABASES = {}

# Wizard state lives in memory, bound to the browser session
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'nails-studio',
    },
    # Uploaded design previews, separate from the sessions
    'previews': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'nails-studio-previews',
        'OPTIONS': {'MAX_ENTRIES': 100},
    },
}

SESSION_ENGINE = 'django.contrib.sessions.backends.cache'
SESSION_CACHE_ALIAS = 'default'
SESSION_EXPIRE_AT_BROWSER_CLOSE = True
SESSION_COOKIE_AGE = 60 * 60 * 2

MESSAGE_STORAGE = 'django.contrib.messages.storage.session.SessionStorage'

# Internationalization
LANGUAGE_CODE = 'es'
TIME_ZONE = 'America/Montevideo'
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# ===========================================
# Studio settings
# ===========================================

STUDIO_NAME = 'Nails Anto Figueroa'
SITE_URL = os.environ.get('SITE_URL', 'https://nailsantofigueroa.uy')

# WhatsApp number used for course inquiries (country code included, digits only)
NAILS_WHATSAPP_NUMBER = os.environ.get('NAILS_WHATSAPP_NUMBER', '5989000000')

# es-UY renders UYU amounts with a plain "$"
NAILS_CURRENCY_SYMBOL = os.environ.get('NAILS_CURRENCY_SYMBOL', '$')

# Uploaded design references larger than this are ignored
NAILS_DESIGN_MAX_BYTES = int(os.environ.get('NAILS_DESIGN_MAX_BYTES', 5 * 1024 * 1024))

# ===========================================
# Logging
# ===========================================

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'bookings': {
            'handlers': ['console'],
            'level': os.environ.get('BOOKINGS_LOG_LEVEL', 'INFO'),
        },
        'website': {
            'handlers': ['console'],
            'level': 'INFO',
        },
    },
}
