# gunicorn.conf.py - Production configuration
import multiprocessing
import os

# Environment-based configuration
env = os.getenv('FLASK_ENV', 'production')

# Server socket
bind = os.getenv('BIND', "0.0.0.0:8000")
backlog = 2048

# Worker processes
# Uploads block on S3 and the database, threads keep workers busy while waiting
workers = int(os.getenv('WEB_CONCURRENCY', multiprocessing.cpu_count() * 2 + 1))
worker_class = "gthread"
threads = 4
timeout = 60
keepalive = 2

# Restart workers - more aggressive in production
max_requests = 1500 if env == 'production' else 1000
max_requests_jitter = 100 if env == 'production' else 50
# The reconciliation scheduler starts once, in the master; post_fork resets the
# database pool each worker inherits
preload_app = True

# Logging - environment specific
if env == 'production':
    errorlog = "/var/log/gunicorn/error.log"
    loglevel = "warning"
    accesslog = "/var/log/gunicorn/access.log"
else:
    errorlog = "-"  # stderr
    loglevel = "info"
    accesslog = "-"  # stdout

access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'

# Process naming
proc_name = f'filevault-{env}'

# Server mechanics
daemon = False
user = None
group = None
tmp_upload_dir = None


def on_starting(server):
    server.log.info(f"Starting filevault in {env} mode")


def post_fork(server, worker):
    """Drop database connections inherited from the master (preloaded app, reconciliation job)."""
    from filevault.extensions import db

    app = worker.app.wsgi()
    with app.app_context():
        db.engine.dispose(close=False)
    server.log.info(f"Worker {worker.pid} reset its database connection pool")
