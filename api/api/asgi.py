"""
ASGI config for the store locations API.

It exposes the ASGI callable as a module-level variable named ``application``.
"""
import os
from dotenv import load_dotenv
from django.core.asgi import get_asgi_application

load_dotenv('.env')
load_dotenv('.env.{}'.format(os.getenv('DJANGO_ENV', 'dev')), override=True)

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'api.settings')

application = get_asgi_application()
