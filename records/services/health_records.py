"""
Health record creation, listing and amendment.

A record is editable for one hour after it is written.  The window is
always stamped by :func:`create_health_record`; it is only enforced on
update when ``settings.ENFORCE_RECORD_EDIT_WINDOW`` is enabled.
"""
from datetime import timedelta
from typing import Optional

from django.conf import settings
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied

from records.models import HealthRecord
from records.services.doctors import format_doctor
from records.services.hospitals import format_hospital, hospital_filter

EDIT_WINDOW = timedelta(hours=1)
RECENT_RECORDS_LIMIT = 10

UPDATABLE_FIELDS = (
    'date_time',
    'disease_name',
    'disease_description',
    'treatment',
    'prescription',
    'risk_level',
    'emergency_warnings',
    'media_files',
)


def format_health_record(record: HealthRecord, *, with_relations: bool = True) -> dict:
    data = {
        'id': record.id,
        'patientId': record.patient_id,
        'hospitalId': record.hospital_id,
        'doctorId': record.doctor_id,
        'dateTime': record.date_time,
        'diseaseName': record.disease_name,
        'diseaseDescription': record.disease_description,
        'treatment': record.treatment,
        'prescription': record.prescription,
        'riskLevel': record.risk_level,
        'emergencyWarnings': record.emergency_warnings,
        'mediaFiles': record.media_files,
        'isEditable': record.is_editable,
        'editableUntil': record.editable_until,
        'createdAt': record.created_at,
        'updatedAt': record.updated_at,
    }
    if with_relations:
        data['hospital'] = format_hospital(record.hospital)
        data['doctor'] = format_doctor(record.doctor)
    return data


def records_with_relations():
    """Records joined to hospital and doctor, newest encounter first."""
    return HealthRecord.objects.select_related('hospital', 'doctor').order_by('-date_time')


def create_health_record(**data) -> HealthRecord:
    # Editability is decided here, never by the caller.
    data.pop('is_editable', None)
    data.pop('editable_until', None)
    now = timezone.now()
    return HealthRecord.objects.create(
        **data,
        is_editable=True,
        editable_until=now + EDIT_WINDOW,
        created_at=now,
        updated_at=now,
    )


def get_health_records_by_patient(patient_id: str) -> list[HealthRecord]:
    return list(records_with_relations().filter(patient_id=patient_id))


def get_recent_records_by_hospital(hospital_id: str) -> list[HealthRecord]:
    qs = HealthRecord.objects.filter(hospital_filter(hospital_id)).order_by('-created_at')
    return list(qs[:RECENT_RECORDS_LIMIT])


def is_within_edit_window(record: HealthRecord, now=None) -> bool:
    now = now or timezone.now()
    return bool(record.is_editable and record.editable_until and record.editable_until > now)


def update_health_record(record_id: str, data: dict) -> Optional[HealthRecord]:
    """Merge ``data`` into the record and stamp ``updated_at``.

    Returns ``None`` when no record has ``record_id``.  Unknown keys are
    ignored.
    """
    record = HealthRecord.objects.filter(id=record_id).first()
    if not record:
        return None
    now = timezone.now()
    if settings.ENFORCE_RECORD_EDIT_WINDOW and not is_within_edit_window(record, now):
        raise PermissionDenied('Health record is no longer editable')
    fields = [f for f in UPDATABLE_FIELDS if f in data]
    for field in fields:
        setattr(record, field, data[field])
    record.updated_at = now
    record.save(update_fields=fields + ['updated_at'])
    return record
