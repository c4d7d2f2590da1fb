"""ASGI entrypoint for the Howl2Go API."""

from howl2go.api.app import create_app
from howl2go.containers import build_container

app = create_app(build_container())
