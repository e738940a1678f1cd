from typing import Optional

from django.db.models import Q

from records.models import Hospital


def format_hospital(hospital: Optional[Hospital]) -> Optional[dict]:
    if hospital is None:
        return None
    return {
        'id': hospital.id,
        'hospitalId': hospital.hospital_id,
        'name': hospital.name,
        'location': hospital.location,
        'contactNumber': hospital.contact_number,
        'email': hospital.email,
        'createdAt': hospital.created_at,
    }


def get_hospital_by_hospital_id(hospital_id: str) -> Optional[Hospital]:
    return Hospital.objects.filter(hospital_id=hospital_id).first()


def hospital_filter(hospital_id: str, prefix: str = 'hospital') -> Q:
    """Match a hospital by primary key or by its identity code."""
    return Q(**{f'{prefix}_id': hospital_id}) | Q(**{f'{prefix}__hospital_id': hospital_id})
