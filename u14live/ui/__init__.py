"""
UI package for the U14 Live match tracker.

This package contains the Flask JSON API used by the browser front end.
"""
from .web_app import create_app, run_web_app, WebAppState

__all__ = ["create_app", "run_web_app", "WebAppState"]
