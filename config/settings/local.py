# config/settings/local.py
from .base import *  # noqa

DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"

# Development
CORS_ALLOW_ALL_ORIGINS = True  # Only for development!
