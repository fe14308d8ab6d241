"""Test helpers."""

import threading
import time

import pytest
import requests


def wait_until(predicate, timeout: float = 5.0, interval: float = 0.01) -> None:
    """Poll predicate until it is true, failing the test after timeout seconds."""
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            pytest.fail(f"Condition not met within {timeout}s")
        time.sleep(interval)


class BackgroundCall(threading.Thread):
    """Run a callable on a daemon thread and keep its result."""

    def __init__(self, func, *args, **kwargs):
        super().__init__(daemon=True)
        self._func = func
        self._args = args
        self._kwargs = kwargs
        self.result = None
        self.error = None

    def run(self):
        try:
            self.result = self._func(*self._args, **self._kwargs)
        except Exception as e:
            self.error = e


def fetch(method: str, url: str, **kwargs) -> requests.Response:
    """Send one request, ignoring proxy settings from the environment."""
    kwargs.setdefault("timeout", 5)
    with requests.Session() as session:
        session.trust_env = False
        return session.request(method, url, **kwargs)
