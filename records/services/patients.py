"""
Patient lookups, search and self-service profile updates.

Patient payloads returned to clients are flat dicts; the "with records"
variants add a ``healthRecords`` list where every entry embeds its
hospital and doctor (``None`` when that row no longer exists).
"""
from typing import Optional

from django.db.models import Prefetch, Value
from django.db.models.functions import StrIndex

from records.models import Patient
from records.services.health_records import format_health_record, records_with_relations
from records.services.users import get_user_by_id

SEARCH_LIMIT = 10
DEFAULT_PAGE_SIZE = 50

SEARCH_FIELDS = {
    'id': 'patient_id',
    'name': 'name',
    'phone': 'phone',
}

UPDATABLE_FIELDS = (
    'name',
    'age',
    'gender',
    'blood_group',
    'phone',
    'email',
    'address',
    'emergency_contact',
)


def format_patient(patient: Patient) -> dict:
    return {
        'id': patient.id,
        'patientId': patient.patient_id,
        'name': patient.name,
        'age': patient.age,
        'gender': patient.gender,
        'bloodGroup': patient.blood_group,
        'phone': patient.phone,
        'email': patient.email,
        'address': patient.address,
        'emergencyContact': patient.emergency_contact,
        'createdAt': patient.created_at,
    }


def format_patient_with_records(patient: Patient, records) -> dict:
    return {
        **format_patient(patient),
        'healthRecords': [format_health_record(r) for r in records],
    }


def _with_records(qs):
    return qs.prefetch_related(
        Prefetch('health_records', queryset=records_with_relations(), to_attr='ordered_records')
    )


def get_patient_by_id(patient_id: str) -> Optional[Patient]:
    return Patient.objects.filter(id=patient_id).first()


def get_patient_by_user_id(user_id: str) -> Optional[Patient]:
    """Resolve the user's role identity code to the patient holding it."""
    user = get_user_by_id(user_id)
    if not user:
        return None
    return Patient.objects.filter(patient_id=user.role_id).first()


def get_patient_with_records(patient_id: str) -> Optional[dict]:
    patient = _with_records(Patient.objects.filter(id=patient_id)).first()
    if not patient:
        return None
    return format_patient_with_records(patient, patient.ordered_records)


def search_patients(query: str, search_type: str = 'name') -> list[dict]:
    """Case sensitive substring search on one field, at most ten matches.

    ``StrIndex`` compiles to INSTR/STRPOS, which keeps the match case
    sensitive on SQLite where LIKE folds ASCII case.
    """
    field = SEARCH_FIELDS[search_type]
    qs = (Patient.objects
          .annotate(match_at=StrIndex(field, Value(query)))
          .filter(match_at__gt=0))
    patients = _with_records(qs)[:SEARCH_LIMIT]
    return [format_patient_with_records(p, p.ordered_records) for p in patients]


def update_patient(patient_id: str, data: dict) -> Optional[Patient]:
    """Apply the supplied fields only.  Returns ``None`` for an unknown id."""
    patient = get_patient_by_id(patient_id)
    if not patient:
        return None
    fields = [f for f in UPDATABLE_FIELDS if f in data]
    for field in fields:
        setattr(patient, field, data[field])
    if fields:
        patient.save(update_fields=fields)
    return patient


def get_all_patients(page: Optional[int] = None, page_size: Optional[int] = None) -> list[Patient]:
    """All patients by name.  Either paging argument alone pages with the other defaulted."""
    qs = Patient.objects.order_by('name')
    if page or page_size:
        page = page or 1
        page_size = page_size or DEFAULT_PAGE_SIZE
        start = (page - 1) * page_size
        qs = qs[start:start + page_size]
    return list(qs)
