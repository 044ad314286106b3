"""
WSGI entry point for the Hospital Staff Scheduler

Usage with Gunicorn:
    gunicorn --config gunicorn_config.py wsgi:app
"""
import os

if 'FLASK_ENV' not in os.environ:
    os.environ['FLASK_ENV'] = 'production'

from hsm import create_app

# Schema is managed by Flask-Migrate (flask db upgrade), not created here
app = create_app(os.environ['FLASK_ENV'])

application = app

if __name__ == "__main__":
    app.run(debug=False, host='0.0.0.0', port=5000)
