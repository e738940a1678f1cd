"""
Face recognition placeholder.

No image matching happens: any uploaded image is ignored and the first
patient by name is returned together with their records.  Clients can be
built against the response shape until a real matcher exists.
"""
from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from records.models import Patient
from records.services.patients import get_patient_with_records


@api_view(['POST'])
def face_recognition(request):
    patient = Patient.objects.order_by('name').only('id').first()
    if not patient:
        raise NotFound('No patient found')
    return Response(get_patient_with_records(patient.id))
