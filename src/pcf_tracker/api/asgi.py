"""ASGI entrypoint for the PCF tracker API."""

from pcf_tracker.api.app import create_app
from pcf_tracker.containers import build_container

app = create_app(build_container())
