"""
URL mappings for the patient records API.

Trailing slashes are omitted on every path (``APPEND_SLASH`` is off).
"""
from django.urls import include, path

from .views import ai, doctors, health, health_records, notes, patients
from .views.auth import login_view, refresh_view, register_view
from .views.face_recognition import face_recognition


urlpatterns = [
    # django_prometheus.urls serves /metrics itself
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Authentication
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', refresh_view, name='refresh_view'),
    # Patients
    path('api/patients/search', patients.patient_search, name='patient_search'),
    path('api/patients/me', patients.patient_me, name='patient_me'),
    path('api/patients/all', patients.patient_all, name='patient_all'),
    # Doctors
    path('api/doctors/stats', doctors.doctor_stats, name='doctor_stats'),
    path('api/doctors/hospital', doctors.hospital_doctors, name='hospital_doctors'),
    # Health records; "recent" must precede the id route
    path('api/health-records', health_records.health_record_create, name='health_record_create'),
    path('api/health-records/recent', health_records.health_record_recent, name='health_record_recent'),
    path('api/health-records/<str:pk>', health_records.health_record_update, name='health_record_update'),
    path('api/notes', notes.note_create, name='note_create'),
    path('api/ai/summarize', ai.ai_summarize, name='ai_summarize'),
    path('api/face-recognition', face_recognition, name='face_recognition'),
]
