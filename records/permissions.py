from django.conf import settings
from rest_framework.permissions import IsAuthenticated


class IsAuthenticatedWhenRequired(IsAuthenticated):
    """``IsAuthenticated`` while ``settings.API_REQUIRE_AUTH`` is on, open otherwise.

    The flag is read per request so it can be flipped without reloading DRF.
    """

    def has_permission(self, request, view):
        if not settings.API_REQUIRE_AUTH:
            return True
        return super().has_permission(request, view)
