"""
Django admin registrations for the records models.

Hospitals, doctors, patients and their records can be inspected and
corrected by a superuser at ``/admin/``.
"""
from django.contrib import admin

from .models import AuditEvent, Doctor, DoctorNote, HealthRecord, Hospital, Patient, User


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('hospital_id', 'name', 'location', 'contact_number', 'created_at')
    search_fields = ('hospital_id', 'name')


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('doctor_id', 'name', 'specialization', 'hospital')
    list_filter = ('hospital', 'specialization')
    search_fields = ('doctor_id', 'name')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('patient_id', 'name', 'age', 'gender', 'blood_group', 'phone')
    list_filter = ('gender', 'blood_group')
    search_fields = ('patient_id', 'name', 'phone')


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('role_id', 'role', 'name', 'is_staff', 'is_superuser')
    list_filter = ('role',)
    search_fields = ('role_id', 'name', 'email')
    exclude = ('password',)


class DoctorNoteInline(admin.TabularInline):
    model = DoctorNote
    extra = 0


@admin.register(HealthRecord)
class HealthRecordAdmin(admin.ModelAdmin):
    list_display = ('disease_name', 'patient', 'hospital', 'doctor', 'risk_level', 'date_time', 'is_editable')
    list_filter = ('risk_level', 'hospital')
    search_fields = ('disease_name', 'patient__name', 'patient__patient_id')
    raw_id_fields = ('patient',)
    inlines = [DoctorNoteInline]


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'object_type', 'object_id', 'user', 'created_at')
    list_filter = ('action', 'object_type')
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')
