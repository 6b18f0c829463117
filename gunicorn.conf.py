# gunicorn.conf.py
import os
import logging
import sys
import multiprocessing

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = 'info'

# Get PORT from environment or use default
port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# The import progress file is rewritten in full per request; keep a single
# worker so chapter submissions are applied one at a time.
cores = multiprocessing.cpu_count()
workers = int(os.getenv('WEB_CONCURRENCY', '1'))
threads = 1


def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} workers on port {port} ({cores} cores available)")


timeout = 60
keepalive = 5
worker_class = "sync"

# Process naming
proc_name = "scripture_reader"
default_proc_name = "scripture_reader"

# Graceful server restart
graceful_timeout = 30
