"""Gunicorn config for Client Orbit (gunicorn clientorbit.main:app)."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async worker. The client data set lives in process memory, so a
# second worker would hold its own, separately refreshed copy.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))

# Two fetch stages, each bounded by CLIENT_ORBIT_FETCH_TIMEOUT, must fit inside one request
timeout = 60

graceful_timeout = 30

keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
