"""
Celery configuration file for Django API project.
"""
import os
import environ
from celery import Celery


# Load environment variables from .env file
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
environ.Env.read_env(os.path.join(BASE_DIR, '.env'))

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'api.settings')

# Create celery app instance
app = Celery('store_locations')

# Load celery config from Django settings
app.config_from_object('django.conf:settings', namespace='CELERY')

# Discover tasks.py modules of the installed apps
app.autodiscover_tasks()
