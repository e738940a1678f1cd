from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status

from records.services.doctors import format_doctor, get_doctor_stats, get_doctors_by_hospital


@api_view(['GET'])
def doctor_stats(request):
    return Response(get_doctor_stats())


@api_view(['GET'])
def hospital_doctors(request):
    """Doctors of one hospital, ``hospitalId`` may be the row id or the hospital code."""
    hospital_id = (request.query_params.get('hospitalId') or '').strip()
    if not hospital_id:
        return Response({'message': 'Hospital ID required'}, status=status.HTTP_400_BAD_REQUEST)
    return Response([format_doctor(d) for d in get_doctors_by_hospital(hospital_id)])
