"""
WSGI config for the store locations API.

It exposes the WSGI callable as a module-level variable named ``application``.
Variables are read from ``.env`` and then from ``.env.<DJANGO_ENV>``. The
environment file is optional for ``dev`` only.
"""

import os
import sys
from dotenv import load_dotenv

load_dotenv('.env')

DJANGO_ENV = os.getenv('DJANGO_ENV', 'dev')  # Default to 'dev'
env_file = '.env.{}'.format(DJANGO_ENV)
if os.path.exists(env_file):
    load_dotenv(env_file, override=True)
elif DJANGO_ENV != 'dev':
    print(f"Environment file '{env_file}' not found.")
    sys.exit(1)


from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'api.settings')

application = get_wsgi_application()
