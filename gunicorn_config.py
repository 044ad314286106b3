"""
Gunicorn configuration for the Hospital Staff Scheduler

Usage:
    gunicorn --config gunicorn_config.py wsgi:app

Shift assignment writes are serialized per user with in-process locks, so
threads inside one worker never exceed a weekly cap together. Several
worker processes still share only the database unique constraint; run a
single worker with threads where weekly caps must hold strictly.
"""
import os

# Server Socket
bind = os.getenv('GUNICORN_BIND', '0.0.0.0:8000')
backlog = int(os.getenv('GUNICORN_BACKLOG', '2048'))

# Worker Processes
workers = int(os.getenv('GUNICORN_WORKERS', '1'))
worker_class = os.getenv('GUNICORN_WORKER_CLASS', 'gthread')
threads = int(os.getenv('GUNICORN_THREADS', '8'))
max_requests = int(os.getenv('GUNICORN_MAX_REQUESTS', '5000'))
max_requests_jitter = int(os.getenv('GUNICORN_MAX_REQUESTS_JITTER', '500'))
timeout = int(os.getenv('GUNICORN_TIMEOUT', '60'))
graceful_timeout = int(os.getenv('GUNICORN_GRACEFUL_TIMEOUT', '30'))
keepalive = int(os.getenv('GUNICORN_KEEPALIVE', '5'))

# Logging
accesslog = os.getenv('GUNICORN_ACCESS_LOG', '-')
errorlog = os.getenv('GUNICORN_ERROR_LOG', '-')
loglevel = os.getenv('GUNICORN_LOG_LEVEL', 'info')

proc_name = 'hsm_scheduler'

# Request limits
limit_request_line = int(os.getenv('GUNICORN_LIMIT_REQUEST_LINE', '4096'))
limit_request_fields = int(os.getenv('GUNICORN_LIMIT_REQUEST_FIELDS', '100'))

raw_env = [
    f"FLASK_ENV={os.getenv('FLASK_ENV', 'production')}",
]


def when_ready(server):
    server.log.info("Hospital Staff Scheduler ready on %s (%s workers, %s threads)", bind, workers, threads)


def post_fork(server, worker):
    if workers > 1:
        server.log.warning("Weekly caps are only serialized within a worker process")
