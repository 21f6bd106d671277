"""
WSGI config for the seedshop project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'seedshop.settings')

application = get_wsgi_application()
