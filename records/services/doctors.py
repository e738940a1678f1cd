from datetime import timedelta
from typing import Optional

from django.utils import timezone

from records.models import Doctor, HealthRecord, Patient
from records.services.hospitals import hospital_filter

RECENT_CASES_DAYS = 30


def format_doctor(doctor: Optional[Doctor]) -> Optional[dict]:
    if doctor is None:
        return None
    return {
        'id': doctor.id,
        'doctorId': doctor.doctor_id,
        'name': doctor.name,
        'specialization': doctor.specialization,
        'hospitalId': doctor.hospital_id,
        'contactNumber': doctor.contact_number,
        'email': doctor.email,
        'createdAt': doctor.created_at,
    }


def get_doctors_by_hospital(hospital_id: str) -> list[Doctor]:
    return list(Doctor.objects.filter(hospital_filter(hospital_id)).order_by('name'))


def get_doctor_stats(now=None) -> dict:
    now = now or timezone.now()
    since = now - timedelta(days=RECENT_CASES_DAYS)
    return {
        'totalPatients': Patient.objects.count(),
        'recentCases': HealthRecord.objects.filter(date_time__gt=since).count(),
        # Stub: there is no review workflow yet.
        'pendingReviews': 0,
    }
