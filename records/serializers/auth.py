from rest_framework import serializers

from records.models import User


class RegisterSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=[c for c, _ in User.ROLE_CHOICES])
    roleId = serializers.CharField(source='role_id', max_length=32)
    password = serializers.CharField(write_only=True, max_length=128)
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    age = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=150)

    def validate_roleId(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('roleId must not be blank')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('password must not be blank')
        return v


class LoginSerializer(serializers.Serializer):
    roleId = serializers.CharField(source='role_id')
    password = serializers.CharField()
    role = serializers.ChoiceField(choices=[c for c, _ in User.ROLE_CHOICES])

    def validate_roleId(self, v):
        return (v or '').strip()


class RefreshSerializer(serializers.Serializer):
    refreshToken = serializers.CharField()
