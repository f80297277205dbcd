#!/usr/bin/env python3
"""Django's command-line utility for administrative tasks."""
import os
import sys
from dotenv import load_dotenv

# Common variables shared by every environment
load_dotenv('.env')

# Determine environment from the environment variable.
# It can be 'dev', 'staging', or 'prod'. The default value is 'dev' if not set.
DJANGO_ENV = os.getenv('DJANGO_ENV', 'dev')  # Default to 'dev'
env_file = '.env.{}'.format(DJANGO_ENV)
if os.path.exists(env_file):
    # Load the appropriate .env file
    load_dotenv(env_file, override=True)
elif DJANGO_ENV != 'dev':
    print(
        "Environment file '{}' not found."
        " Please create the file or set the environment variable.".format(env_file)
    )
    sys.exit(1)


def main():
    """Run administrative tasks."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'api.settings')
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
