"""
WSGI config for the habit tracker service.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'habit_tracker.settings')

application = get_wsgi_application()
