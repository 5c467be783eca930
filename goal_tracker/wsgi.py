# goal_tracker/wsgi.py
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'goal_tracker.settings')

application = get_wsgi_application()
