from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from records.models import HealthRecord, Patient, User
from records.services.patients import (
    DEFAULT_PAGE_SIZE,
    SEARCH_LIMIT,
    get_all_patients,
    get_patient_by_user_id,
    get_patient_with_records,
    search_patients,
    update_patient,
)
from records.services.users import create_user

pytestmark = pytest.mark.django_db


def add_record(patient, *, days_ago=0, hospital=None, doctor=None, name='Migraine'):
    return HealthRecord.objects.create(
        patient=patient, hospital=hospital, doctor=doctor,
        date_time=timezone.now() - timedelta(days=days_ago),
        disease_name=name, disease_description='Severe recurring headaches', risk_level='low',
    )


def test_patient_with_records_newest_first(patient, hospital, doctor):
    for days in (30, 2, 100, 0):
        add_record(patient, days_ago=days, hospital=hospital, doctor=doctor)
    data = get_patient_with_records(patient.id)
    assert data['patientId'] == 'PT0001'
    dates = [r['dateTime'] for r in data['healthRecords']]
    assert len(dates) == 4
    assert dates == sorted(dates, reverse=True)
    assert data['healthRecords'][0]['hospital']['name'] == hospital.name
    assert data['healthRecords'][0]['doctor']['doctorId'] == 'DOC001'


def test_patient_without_records_has_empty_list(patient):
    assert get_patient_with_records(patient.id)['healthRecords'] == []


def test_missing_patient_is_none():
    assert get_patient_with_records('no-such-id') is None


def test_deleted_doctor_leaves_null_reference(patient, hospital, doctor):
    add_record(patient, hospital=hospital, doctor=doctor)
    doctor.delete()
    record = get_patient_with_records(patient.id)['healthRecords'][0]
    assert record['doctor'] is None
    assert record['doctorId'] is None
    assert record['hospital']['hospitalId'] == 'HOSP001'


def test_patient_by_user_id(patient, patient_user):
    assert get_patient_by_user_id(patient_user.id) == patient
    assert get_patient_by_user_id('missing') is None
    orphan = create_user(role=User.ROLE_PATIENT, role_id='PT9999', password='x', name='Nobody')
    assert get_patient_by_user_id(orphan.id) is None


def test_search_is_limited():
    Patient.objects.bulk_create([Patient(patient_id=f'PT{i:04d}', name=f'Arun {i}') for i in range(15)])
    results = search_patients('Arun', 'name')
    assert len(results) == SEARCH_LIMIT
    assert all('Arun' in p['name'] for p in results)
    assert all('healthRecords' in p for p in results)


def test_search_is_case_sensitive():
    Patient.objects.create(patient_id='PT0001', name='Arun Bhat')
    Patient.objects.create(patient_id='PT0002', name='Tarun Rao')
    assert [p['name'] for p in search_patients('Arun', 'name')] == ['Arun Bhat']
    assert [p['name'] for p in search_patients('arun', 'name')] == ['Tarun Rao']
    assert search_patients('ARUN', 'name') == []


def test_search_by_id_and_phone():
    Patient.objects.create(patient_id='PT0042', name='Deepa Iyer', phone='+91 9000011111')
    Patient.objects.create(patient_id='PT0043', name='Esha Joshi', phone='+91 9222233333')
    assert [p['patientId'] for p in search_patients('0042', 'id')] == ['PT0042']
    assert [p['name'] for p in search_patients('22223', 'phone')] == ['Esha Joshi']


def test_update_patient_applies_only_given_fields(patient):
    updated = update_patient(patient.id, {'phone': '+91 1111111111', 'blood_group': 'AB-'})
    assert updated.phone == '+91 1111111111'
    patient.refresh_from_db()
    assert patient.blood_group == 'AB-'
    assert patient.name == 'Arun Bhat'
    assert patient.age == 42
    assert update_patient('missing', {'phone': '1'}) is None


def test_all_patients_sorted_by_name():
    for code, name in [('PT0003', 'Chetan'), ('PT0001', 'Arun'), ('PT0002', 'Bhavani')]:
        Patient.objects.create(patient_id=code, name=name)
    assert [p.name for p in get_all_patients()] == ['Arun', 'Bhavani', 'Chetan']
    assert [p.name for p in get_all_patients(page=2, page_size=2)] == ['Chetan']


# -- HTTP ---------------------------------------------------------------

def test_search_endpoint(api_client, patient):
    r = api_client.get(reverse('patient_search'), {'q': 'Arun'})
    assert r.status_code == 200
    assert [p['patientId'] for p in r.data] == ['PT0001']


def test_search_endpoint_without_query_returns_empty(api_client, patient):
    assert api_client.get(reverse('patient_search')).data == []
    assert api_client.get(reverse('patient_search'), {'q': ''}).data == []


def test_search_endpoint_rejects_unknown_type(api_client):
    r = api_client.get(reverse('patient_search'), {'q': 'x', 'type': 'email'})
    assert r.status_code == 400
    assert r.data['message'].startswith('type:')


def test_me_requires_user_id(api_client):
    r = api_client.get(reverse('patient_me'))
    assert r.status_code == 400
    assert r.data == {'message': 'User ID required'}


def test_me_unknown_user(api_client):
    r = api_client.get(reverse('patient_me'), {'userId': 'missing'})
    assert r.status_code == 404
    assert r.data == {'message': 'Patient not found'}


def test_me_returns_patient_with_records(api_client, patient, patient_user, hospital):
    add_record(patient, hospital=hospital)
    r = api_client.get(reverse('patient_me'), {'userId': patient_user.id})
    assert r.status_code == 200
    assert r.data['id'] == patient.id
    assert len(r.data['healthRecords']) == 1


def test_me_patch_round_trip(api_client, patient, patient_user):
    url = f"{reverse('patient_me')}?userId={patient_user.id}"
    r = api_client.patch(url, {'address': '12, MG Road', 'emergencyContact': '+91 2222222222'}, format='json')
    assert r.status_code == 200
    assert r.data['address'] == '12, MG Road'
    assert r.data['emergencyContact'] == '+91 2222222222'
    assert r.data['name'] == 'Arun Bhat'
    again = api_client.get(reverse('patient_me'), {'userId': patient_user.id})
    assert again.data['address'] == '12, MG Road'


def test_me_patch_validation(api_client, patient, patient_user):
    url = f"{reverse('patient_me')}?userId={patient_user.id}"
    r = api_client.patch(url, {'age': -3}, format='json')
    assert r.status_code == 400
    assert r.data['message'].startswith('age:')


def test_all_endpoint(api_client):
    Patient.objects.create(patient_id='PT0002', name='Zara Verma')
    Patient.objects.create(patient_id='PT0001', name='Arun Bhat')
    r = api_client.get(reverse('patient_all'))
    assert r.status_code == 200
    assert [p['name'] for p in r.data] == ['Arun Bhat', 'Zara Verma']
    paged = api_client.get(reverse('patient_all'), {'page': 1, 'pageSize': 1})
    assert [p['name'] for p in paged.data] == ['Arun Bhat']


def test_all_patients_page_without_size_uses_default():
    Patient.objects.bulk_create([Patient(patient_id=f'PT{i:04d}', name=f'Patient {i:03d}')
                                 for i in range(DEFAULT_PAGE_SIZE + 5)])
    assert len(get_all_patients(page=1)) == DEFAULT_PAGE_SIZE
    assert [p.name for p in get_all_patients(page=2)] == [f'Patient {i:03d}' for i in range(DEFAULT_PAGE_SIZE, DEFAULT_PAGE_SIZE + 5)]
    assert len(get_all_patients(page_size=3)) == 3
    assert len(get_all_patients()) == DEFAULT_PAGE_SIZE + 5


def test_all_endpoint_page_only(api_client):
    Patient.objects.bulk_create([Patient(patient_id=f'PT{i:04d}', name=f'Patient {i:03d}')
                                 for i in range(DEFAULT_PAGE_SIZE + 1)])
    r = api_client.get(reverse('patient_all'), {'page': 2})
    assert [p['name'] for p in r.data] == [f'Patient {DEFAULT_PAGE_SIZE:03d}']
