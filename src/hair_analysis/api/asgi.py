"""ASGI entrypoint for the hair analysis API."""

from hair_analysis.api.app import create_app
from hair_analysis.containers import build_container

app = create_app(build_container())
