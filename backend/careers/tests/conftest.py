import pytest
from django.apps import apps

from careers.services import CareerServices
from careers.tests.fakes import FakeFirebaseClient, FakeFirestore


@pytest.fixture
def fake_db():
    return FakeFirestore()


@pytest.fixture
def firebase(fake_db):
    return FakeFirebaseClient(db=fake_db)


@pytest.fixture
def services(firebase):
    """Install services backed by the in-memory Firestore for the duration of a test."""
    config = apps.get_app_config('careers')
    original = config.services
    config.services = CareerServices.build(firebase)
    yield config.services
    config.services = original
