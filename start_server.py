"""Production server startup script for the cafe discovery service.

This module provides the entry point for starting the Django application
with Gunicorn in production environments (Docker containers, Kubernetes).
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start the cafe discovery service using Gunicorn.

    Runs a single worker process with several threads. The Google Sheets
    request budget and the query cache are held in process memory, so more
    worker processes would each get a full budget of their own.

    Environment Variables:
    - PORT: Port to bind (default: 8000)
    - GUNICORN_THREADS: Threads in the worker (default: 8)
    """
    sys.argv = [
        "gunicorn",
        "cafe_discovery.wsgi:application",
        "--bind",
        f"0.0.0.0:{os.getenv('PORT', '8000')}",
        "--workers",
        "1",
        "--threads",
        os.getenv("GUNICORN_THREADS", "8"),
        "--timeout",
        "60",
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
