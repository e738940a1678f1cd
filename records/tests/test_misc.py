from io import StringIO

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.db.models import F
from django.urls import reverse

from records.models import Doctor, DoctorNote, HealthRecord, Hospital, Patient, User
from records.services.users import authenticate_user

pytestmark = pytest.mark.django_db


@pytest.fixture
def record(patient, hospital, doctor):
    return HealthRecord.objects.create(patient=patient, hospital=hospital, doctor=doctor,
                                       disease_name='Arthritis', disease_description='Joint inflammation',
                                       risk_level='medium')


def test_note_create(api_client, record, doctor):
    r = api_client.post(reverse('note_create'),
                        {'healthRecordId': record.id, 'doctorId': doctor.id, 'note': '<img src=x onerror=alert(1)>Review in two weeks'},
                        format='json')
    assert r.status_code == 200
    assert r.data['note'] == 'Review in two weeks'
    assert r.data['healthRecordId'] == record.id
    assert DoctorNote.objects.filter(health_record=record).count() == 1


def test_note_validation(api_client, record):
    r = api_client.post(reverse('note_create'), {'healthRecordId': record.id, 'note': '   '}, format='json')
    assert r.status_code == 400
    assert r.data['message'].startswith('note:')


def test_face_recognition_without_patients(api_client):
    r = api_client.post(reverse('face_recognition'))
    assert r.status_code == 404
    assert r.data == {'message': 'No patient found'}


def test_face_recognition_returns_first_patient(api_client, patient):
    Patient.objects.create(patient_id='PT0002', name='Zara Verma')
    photo = SimpleUploadedFile('face.jpg', b'\xff\xd8\xff', content_type='image/jpeg')
    r = api_client.post(reverse('face_recognition'), {'image': photo}, format='multipart')
    assert r.status_code == 200
    assert r.data['patientId'] == 'PT0001'
    assert r.data['healthRecords'] == []


def test_healthz(api_client):
    r = api_client.get(reverse('healthz'))
    assert r.status_code == 200
    assert r.json() == {'ok': True, 'db': True}


def test_seed_data():
    out = StringIO()
    call_command('seed_data', patients=5, seed=7, stdout=out)
    assert Hospital.objects.count() == 2
    assert Doctor.objects.count() == 10
    assert Patient.objects.count() == 5
    assert User.objects.count() == 3
    assert 5 <= HealthRecord.objects.count() <= 25
    # doctors always belong to the record's hospital
    assert not HealthRecord.objects.exclude(doctor__hospital=F('hospital')).exists()
    for rec in HealthRecord.objects.all():
        assert rec.is_editable == (rec.editable_until is not None)
    assert authenticate_user('DOC001', 'password123', 'doctor')
    assert authenticate_user('PT0001', 'password123', 'patient')
    assert authenticate_user('HOSP001', 'password123', 'hospital')
    assert 'Database seeded successfully' in out.getvalue()


def test_seed_data_replaces_existing_rows(patient):
    call_command('seed_data', patients=2, seed=1, stdout=StringIO())
    call_command('seed_data', patients=3, seed=2, stdout=StringIO())
    assert Patient.objects.count() == 3
    assert not Patient.objects.filter(id=patient.id).exists()


def test_check_db(hospital):
    buf = StringIO()
    call_command('check_db', stdout=buf)
    out = buf.getvalue()
    assert 'Hospitals: 1' in out
    assert 'Patients: 0' in out
    assert 'DoctorNotes: 0' in out


def test_metrics_exposed(api_client):
    r = api_client.get('/metrics')
    assert r.status_code == 200
    assert b'django_http_requests' in r.content


def test_seed_data_keeps_superusers():
    admin = User.objects.create_superuser('root', 'root@example.com', 'pw')
    call_command('seed_data', patients=2, seed=3, stdout=StringIO())
    assert User.objects.filter(id=admin.id, is_superuser=True).exists()
    assert User.objects.filter(is_superuser=False).count() == 3


def test_models_match_migrations():
    # exits non-zero when a model drifts from records/migrations
    call_command('makemigrations', 'records', check=True, dry_run=True, stdout=StringIO())
    assert User._meta.verbose_name == 'user'
