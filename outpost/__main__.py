"""Allow running the service with ``python -m outpost``."""

from outpost.server import run

run()
