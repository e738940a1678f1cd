from rest_framework import serializers

from records.services.patients import SEARCH_FIELDS


class PatientSearchQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    type = serializers.ChoiceField(choices=list(SEARCH_FIELDS), required=False, default='name')


class PatientListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1)
    pageSize = serializers.IntegerField(required=False, min_value=1, max_value=500)


class PatientUpdateSerializer(serializers.Serializer):
    """Self-service profile fields.  The identity code cannot be changed here."""
    name = serializers.CharField(required=False, max_length=255)
    age = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=150)
    gender = serializers.CharField(required=False, allow_blank=True, max_length=16)
    bloodGroup = serializers.CharField(source='blood_group', required=False, allow_blank=True, max_length=8)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    email = serializers.EmailField(required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    emergencyContact = serializers.CharField(source='emergency_contact', required=False, allow_blank=True, max_length=64)
