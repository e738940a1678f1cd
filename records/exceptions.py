import logging

from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'Internal server error'


def _flatten(detail) -> str:
    """Collapse DRF error detail (str, list or field dict) into one message."""
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            text = _flatten(value)
            parts.append(text if field in ('detail', 'non_field_errors') else f'{field}: {text}')
        return '; '.join(parts)
    if isinstance(detail, (list, tuple)):
        return '; '.join(_flatten(d) for d in detail)
    return str(detail)


def api_exception_handler(exc, context):
    """Render every API error as ``{"message": str}``."""
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception("unhandled error in %s", context.get('view').__class__.__name__ if context.get('view') else 'view')
        return Response({'message': str(exc) or GENERIC_ERROR_MESSAGE}, status=500)
    return Response({'message': _flatten(resp.data) or GENERIC_ERROR_MESSAGE}, status=resp.status_code, headers=_auth_headers(resp))


def _auth_headers(resp) -> dict:
    headers = {}
    for name in ('WWW-Authenticate', 'Retry-After'):
        if resp.has_header(name):
            headers[name] = resp[name]
    return headers
