"""
Patient endpoints.

``me`` identifies the patient through the linked user account: the
``userId`` query parameter wins, and when it is absent the authenticated
user (bearer JWT) is used instead.
"""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework import status

from records.serializers.patient import (
    PatientListQuerySerializer,
    PatientSearchQuerySerializer,
    PatientUpdateSerializer,
)
from records.services.audit import log_action
from records.services.patients import (
    format_patient,
    get_all_patients,
    get_patient_by_user_id,
    get_patient_with_records,
    search_patients,
    update_patient,
)


def _user_id(request):
    user_id = (request.query_params.get('userId') or '').strip()
    if not user_id and getattr(request.user, 'is_authenticated', False):
        user_id = request.user.id
    return user_id


@api_view(['GET'])
def patient_search(request):
    q = PatientSearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    query = q.validated_data.get('q')
    if not query:
        return Response([])
    return Response(search_patients(query, q.validated_data['type']))


@api_view(['GET', 'PATCH'])
def patient_me(request):
    user_id = _user_id(request)
    if not user_id:
        return Response({'message': 'User ID required'}, status=status.HTTP_400_BAD_REQUEST)
    patient = get_patient_by_user_id(user_id)
    if not patient:
        raise NotFound('Patient not found')

    if request.method == 'GET':
        return Response(get_patient_with_records(patient.id))

    s = PatientUpdateSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    updated = update_patient(patient.id, s.validated_data)
    if not updated:
        raise NotFound('Patient not found')
    log_action(user=request.user, action='patient_update', object_type='patient', object_id=updated.id,
               detail={'fields': sorted(s.validated_data)})
    return Response(format_patient(updated))


@api_view(['GET'])
def patient_all(request):
    q = PatientListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    patients = get_all_patients(q.validated_data.get('page'), q.validated_data.get('pageSize'))
    return Response([format_patient(p) for p in patients])
