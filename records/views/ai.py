import logging

from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework import status

from records.services.patients import get_patient_with_records
from records.services.summary import SummaryGenerationError, format_patient_history, generate_patient_summary

logger = logging.getLogger(__name__)


@api_view(['POST'])
def ai_summarize(request):
    """Summarise a patient's full record history with the configured OpenAI model."""
    patient_id = str(request.data.get('patientId') or '').strip()
    if not patient_id:
        return Response({'message': 'Patient ID required'}, status=status.HTTP_400_BAD_REQUEST)
    patient = get_patient_with_records(patient_id)
    if not patient:
        raise NotFound('Patient not found')

    history = format_patient_history(patient['healthRecords'])
    try:
        summary = generate_patient_summary(history)
    except SummaryGenerationError as exc:
        return Response({'message': str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.info("summary generated for patient %s (%d records)", patient_id, len(patient['healthRecords']))
    return Response({'summary': summary})
