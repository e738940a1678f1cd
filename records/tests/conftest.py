from types import SimpleNamespace

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from records.models import Doctor, Hospital, Patient, User
from records.services import summary
from records.services.users import create_user


@pytest.fixture(autouse=True)
def _clear_cache():
    # login throttle counters live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def hospital(db):
    return Hospital.objects.create(hospital_id='HOSP001', name='Chikkamagalur District Hospital',
                                   location='Chikkamagalur, Karnataka')


@pytest.fixture
def doctor(hospital):
    return Doctor.objects.create(doctor_id='DOC001', name='Dr. Rajesh Kumar',
                                 specialization='Cardiology', hospital=hospital)


@pytest.fixture
def patient(db):
    return Patient.objects.create(patient_id='PT0001', name='Arun Bhat', age=42, gender='Male',
                                  blood_group='O+', phone='+91 9876543210')


@pytest.fixture
def patient_user(patient):
    return create_user(role=User.ROLE_PATIENT, role_id=patient.patient_id, password='password123',
                       name=patient.name)


class FakeCompletions:
    def __init__(self):
        self.content = 'Chief Complaints: none'
        self.error = None
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def fake_openai(monkeypatch):
    """Replace the OpenAI client; tests set ``content`` or ``error`` on the result."""
    completions = FakeCompletions()
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    monkeypatch.setattr(summary, 'get_client', lambda: client)
    return completions
