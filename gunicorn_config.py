import os

wsgi_app = 'contact_relay:create_app()'
workers = int(os.environ.get('GUNICORN_WORKERS', '2'))
threads = int(os.environ.get('GUNICORN_THREADS', '4'))
bind = os.environ.get('GUNICORN_BIND', '0.0.0.0:8000')
# SES calls are the only blocking work per request
timeout = int(os.environ.get('GUNICORN_TIMEOUT', '30'))
worker_class = 'gthread'
accesslog = '-'
errorlog = '-'
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()
