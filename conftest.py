"""
Pytest bootstrap for running Django tests without pytest-django.

The project uses Django's `SimpleTestCase` classes only (there is no
database). When running tests via `pytest` directly, we must:
- set `DJANGO_SETTINGS_MODULE`
- point the history cache at a throwaway directory
- call `django.setup()`
"""

import os
import shutil
import tempfile

import django
from django.test.utils import setup_test_environment, teardown_test_environment


_history_dir = None


def pytest_configure():
    global _history_dir
    _history_dir = tempfile.mkdtemp(prefix="restora-history-")
    os.environ["RESTORA_HISTORY_DIR"] = _history_dir
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
    django.setup()


def pytest_sessionstart(session):
    setup_test_environment()


def pytest_sessionfinish(session, exitstatus):
    teardown_test_environment()
    if _history_dir:
        shutil.rmtree(_history_dir, ignore_errors=True)
