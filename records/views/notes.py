from rest_framework.decorators import api_view
from rest_framework.response import Response

from records.serializers.health_record import DoctorNoteCreateSerializer
from records.services.notes import create_doctor_note, format_note


@api_view(['POST'])
def note_create(request):
    s = DoctorNoteCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return Response(format_note(create_doctor_note(**s.validated_data)))
