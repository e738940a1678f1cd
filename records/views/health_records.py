"""
Health record endpoints.

Created records are always editable for one hour regardless of what the
client sends.  Amendments are accepted for any existing record unless
``ENFORCE_RECORD_EDIT_WINDOW`` is switched on.
"""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework import status

from records.serializers.health_record import HealthRecordCreateSerializer, HealthRecordUpdateSerializer
from records.services.audit import log_action
from records.services.health_records import (
    create_health_record,
    format_health_record,
    get_recent_records_by_hospital,
    update_health_record,
)


@api_view(['POST'])
def health_record_create(request):
    s = HealthRecordCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    record = create_health_record(**s.validated_data)
    log_action(user=request.user, action='health_record_create', object_type='health_record',
               object_id=record.id, detail={'patientId': record.patient_id})
    return Response(format_health_record(record, with_relations=False))


@api_view(['GET'])
def health_record_recent(request):
    hospital_id = (request.query_params.get('hospitalId') or '').strip()
    if not hospital_id:
        return Response({'message': 'Hospital ID required'}, status=status.HTTP_400_BAD_REQUEST)
    records = get_recent_records_by_hospital(hospital_id)
    return Response([format_health_record(r, with_relations=False) for r in records])


@api_view(['PATCH'])
def health_record_update(request, pk: str):
    s = HealthRecordUpdateSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    record = update_health_record(pk, s.validated_data)
    if not record:
        raise NotFound('Health record not found')
    log_action(user=request.user, action='health_record_update', object_type='health_record',
               object_id=record.id, detail={'fields': sorted(s.validated_data)})
    return Response(format_health_record(record, with_relations=False))
