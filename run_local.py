#!/usr/bin/env python
"""Script to run the Django development server."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Run the Django development server.

    Extra command line arguments are passed through, e.g. an address:port.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "cafe_discovery.settings")
    execute_from_command_line([sys.argv[0], "runserver", *sys.argv[1:]])


if __name__ == "__main__":
    main()
