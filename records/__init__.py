"""Patient records application.

This package contains models, serializers, services and views
implementing the hospital patient records API.
"""
