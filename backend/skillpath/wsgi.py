"""
WSGI config for the skillpath project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'skillpath.settings')

application = get_wsgi_application()
