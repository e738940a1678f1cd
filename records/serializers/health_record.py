import bleach
from rest_framework import serializers

from records.models import Doctor, HealthRecord, Hospital, Patient


class _ClinicalFieldsMixin(serializers.Serializer):
    dateTime = serializers.DateTimeField(source='date_time', required=False)
    diseaseName = serializers.CharField(source='disease_name', max_length=255)
    diseaseDescription = serializers.CharField(source='disease_description')
    treatment = serializers.CharField(required=False, allow_blank=True)
    prescription = serializers.CharField(required=False, allow_blank=True)
    riskLevel = serializers.ChoiceField(source='risk_level', choices=[c for c, _ in HealthRecord.RISK_CHOICES])
    emergencyWarnings = serializers.CharField(source='emergency_warnings', required=False, allow_blank=True, allow_null=True)
    mediaFiles = serializers.ListField(source='media_files', child=serializers.CharField(max_length=1024), required=False)

    def validate_emergencyWarnings(self, v):
        return v or None


class HealthRecordCreateSerializer(_ClinicalFieldsMixin):
    patientId = serializers.PrimaryKeyRelatedField(source='patient', queryset=Patient.objects.all())
    hospitalId = serializers.PrimaryKeyRelatedField(source='hospital', queryset=Hospital.objects.all())
    doctorId = serializers.PrimaryKeyRelatedField(source='doctor', queryset=Doctor.objects.all())
    # Accepted for compatibility; the data access layer overrides both.
    isEditable = serializers.BooleanField(source='is_editable', required=False)
    editableUntil = serializers.DateTimeField(source='editable_until', required=False, allow_null=True)


class HealthRecordUpdateSerializer(_ClinicalFieldsMixin):
    """Used with ``partial=True``: only supplied fields are validated and applied."""


class DoctorNoteCreateSerializer(serializers.Serializer):
    healthRecordId = serializers.PrimaryKeyRelatedField(source='health_record', queryset=HealthRecord.objects.all())
    doctorId = serializers.PrimaryKeyRelatedField(source='doctor', queryset=Doctor.objects.all(), required=False, allow_null=True)
    note = serializers.CharField(max_length=5000)

    def validate_note(self, v):
        v = bleach.clean((v or '').strip(), strip=True)
        if not v:
            raise serializers.ValidationError('note must not be blank')
        return v
