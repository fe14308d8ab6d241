"""Utility functions and helpers."""

from .responses import delayed, echo_response, json_response, status_response, text_response

__all__ = ["delayed", "echo_response", "json_response", "status_response", "text_response"]
