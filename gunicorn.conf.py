"""Gunicorn configuration for production deployment."""

# Server socket
bind = '0.0.0.0:8000'

# Worker processes: several writers may race for the same (driver, date);
# SQLite serializes them and the busy timeout (SQLITE_TIMEOUT) queues the rest.
workers = 2
threads = 4
worker_class = 'gthread'

# Timeout: confirmation emails are sent inside the booking request
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logging
accesslog = '/app/logs/gunicorn-access.log'
errorlog = '/app/logs/gunicorn-error.log'
loglevel = 'info'
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = 'unicab-bookings'

# Preload app for faster worker startups
preload_app = True

# Worker recycling
max_requests = 1000
max_requests_jitter = 50
