import os
import subprocess
import sys
from pathlib import Path

import pytest
from django.apps import apps

from careers.services import CareerServices, get_services
from careers.tests.fakes import FakeFirebaseClient

BACKEND_DIR = Path(__file__).resolve().parents[2]


@pytest.mark.unit
def test_django_setup_in_fresh_interpreter():
    # App loading imports the DRF settings, which import the authentication class.
    env = dict(os.environ, DJANGO_SETTINGS_MODULE='skillpath.settings', PYTHONPATH=str(BACKEND_DIR))
    env.pop('FIREBASE_CREDENTIALS', None)
    result = subprocess.run(
        [sys.executable, '-c', 'import django; django.setup(); from rest_framework import views'],
        cwd=BACKEND_DIR,
        env=env,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr


@pytest.mark.unit
def test_services_built_at_startup():
    assert isinstance(apps.get_app_config('careers').services, CareerServices)
    assert get_services() is apps.get_app_config('careers').services


@pytest.mark.unit
def test_close_releases_firebase():
    client = FakeFirebaseClient()
    CareerServices.build(client).close()
    assert client.closed is True
