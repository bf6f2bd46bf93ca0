import os

bind = os.getenv("GUNICORN_BIND", "unix:/var/www/farmer-registry/gunicorn.sock")
workers = int(os.getenv("GUNICORN_WORKERS", 3))
worker_class = "sync"
worker_tmp_dir = "/dev/shm"
max_requests = 1000
max_requests_jitter = 100
# Status updates wait on SMTP and the SMS gateway inline
timeout = 120
keepalive = 5

wsgi_app = "core.wsgi:application"

# Logging
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "/var/log/farmer-registry/access.log")
errorlog = os.getenv("GUNICORN_ERROR_LOG", "/var/log/farmer-registry/error.log")
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "farmer-registry"

# Server mechanics
daemon = False
pidfile = "/var/run/farmer-registry/gunicorn.pid"
umask = 0o007


# Server hooks
def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting farmer registry")


def when_ready(server):
    server.log.info("Farmer registry is ready. Spawning workers")


def worker_abort(worker):
    """Called when a worker receives the SIGABRT signal."""
    worker.log.info("Worker received SIGABRT signal, usually a request over the timeout")
