"""ASGI adapter: App, request pipeline and response sending."""

from centra.server.app import App

__all__ = ["App"]
