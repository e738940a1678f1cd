from records.models import DoctorNote


def format_note(note: DoctorNote) -> dict:
    return {
        'id': note.id,
        'healthRecordId': note.health_record_id,
        'doctorId': note.doctor_id,
        'note': note.note,
        'createdAt': note.created_at,
    }


def create_doctor_note(**data) -> DoctorNote:
    return DoctorNote.objects.create(**data)
