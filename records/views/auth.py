"""
Registration and login.

Login is by role plus role identity code (``DOC001``, ``PT0001``,
``HOSP001``).  A successful login returns the user without the password
hash, together with a JWT pair that API clients may present as
``Authorization: Bearer <accessToken>``.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from records.throttling import LoginRateThrottle
from records.serializers.auth import LoginSerializer, RefreshSerializer, RegisterSerializer
from records.services.audit import log_action
from records.services.users import authenticate_user, format_user, register_user

INVALID_CREDENTIALS = {'message': 'Invalid credentials'}


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = register_user(**s.validated_data)
    log_action(user=user, action='register', object_type='user', object_id=user.id,
               detail={'role': user.role, 'roleId': user.role_id})
    return Response(format_user(user))


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    user = authenticate_user(vd['role_id'], vd['password'], vd['role'])
    if not user:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'role': vd['role'], 'roleId': vd['role_id'],
                           'ip': request.META.get('REMOTE_ADDR')})
        return Response(INVALID_CREDENTIALS, status=status.HTTP_401_UNAUTHORIZED)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})
    refresh = RefreshToken.for_user(user)
    payload = {
        **format_user(user),
        'accessToken': str(refresh.access_token),
        'refreshToken': str(refresh),
    }
    return Response(payload)


@api_view(['POST'])
@permission_classes([AllowAny])
def refresh_view(request):
    """Exchange a refresh token for a new access token."""
    s = RefreshSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        refresh = RefreshToken(s.validated_data['refreshToken'])
    except TokenError:
        return Response({'message': 'Invalid or expired refresh token'}, status=status.HTTP_401_UNAUTHORIZED)
    return Response({'accessToken': str(refresh.access_token)})
