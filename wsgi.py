"""
WSGI / Flask-Migrate entry point.

Usage:
    gunicorn wsgi:app
    flask --app wsgi db upgrade
    flask --app wsgi seed-vocabularies
"""

import atexit

from customer_model import create_app, shutdown_app

app = create_app()
atexit.register(shutdown_app, app)
