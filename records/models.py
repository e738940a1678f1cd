"""
Database models for the patient records backend.

Hospitals, doctors and patients each carry a human facing identity code
(``HOSP001``, ``DOC001``, ``PT0001``) next to an opaque primary key.
Users authenticate with a role and the identity code of that role.
Health records tie a patient to the hospital and doctor who saw them.
"""
from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models
from django.utils import timezone


def new_id() -> str:
    return uuid.uuid4().hex


class Hospital(models.Model):
    id = models.CharField(max_length=36, primary_key=True, default=new_id, editable=False)
    hospital_id = models.CharField(max_length=32, unique=True, help_text="Identity code, e.g. 'HOSP001'")
    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, blank=True)
    contact_number = models.CharField(max_length=32, blank=True)
    email = models.EmailField(blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self) -> str:
        return f"{self.name} ({self.hospital_id})"


class Doctor(models.Model):
    id = models.CharField(max_length=36, primary_key=True, default=new_id, editable=False)
    doctor_id = models.CharField(max_length=32, unique=True, help_text="Identity code, e.g. 'DOC001'")
    name = models.CharField(max_length=255, db_index=True)
    specialization = models.CharField(max_length=255, blank=True)
    hospital = models.ForeignKey(
        Hospital, null=True, blank=True, on_delete=models.SET_NULL, related_name='doctors'
    )
    contact_number = models.CharField(max_length=32, blank=True)
    email = models.EmailField(blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self) -> str:
        return f"{self.name} ({self.doctor_id})"


class Patient(models.Model):
    id = models.CharField(max_length=36, primary_key=True, default=new_id, editable=False)
    patient_id = models.CharField(max_length=32, unique=True, help_text="Identity code, e.g. 'PT0001'")
    name = models.CharField(max_length=255, db_index=True)
    age = models.PositiveIntegerField(null=True, blank=True)
    gender = models.CharField(max_length=16, blank=True)
    blood_group = models.CharField(max_length=8, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    email = models.EmailField(blank=True)
    address = models.TextField(blank=True)
    emergency_contact = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self) -> str:
        return f"{self.name} ({self.patient_id})"


class RecordsUserManager(UserManager):
    def create_superuser(self, username=None, email=None, password=None, **extra_fields):
        extra_fields.setdefault('role', User.ROLE_HOSPITAL)
        extra_fields.setdefault('role_id', username)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """Authentication identity for a doctor, patient or hospital admin.

    ``role_id`` holds the identity code of the matching Doctor, Patient
    or Hospital.  That link is by value only; no foreign key enforces it.
    ``username`` is derived from the pair so Django's auth machinery and
    the admin keep working.
    """
    ROLE_DOCTOR = 'doctor'
    ROLE_PATIENT = 'patient'
    ROLE_HOSPITAL = 'hospital'
    ROLE_CHOICES = [
        (ROLE_DOCTOR, 'Doctor'),
        (ROLE_PATIENT, 'Patient'),
        (ROLE_HOSPITAL, 'Hospital'),
    ]

    id = models.CharField(max_length=36, primary_key=True, default=new_id, editable=False)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES)
    role_id = models.CharField(max_length=32)
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=32, blank=True)
    age = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    objects = RecordsUserManager()

    class Meta(AbstractUser.Meta):
        constraints = [
            models.UniqueConstraint(fields=['role', 'role_id'], name='unique_user_role_identity'),
        ]

    def save(self, *args, **kwargs):
        if not self.username:
            self.username = f"{self.role}:{self.role_id}"
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.role_id} ({self.role})"


class HealthRecord(models.Model):
    """One clinical encounter.

    New records are editable for one hour; ``is_editable`` and
    ``editable_until`` are always set by the data access layer, never by
    the caller.
    """
    RISK_LOW = 'low'
    RISK_MEDIUM = 'medium'
    RISK_HIGH = 'high'
    RISK_CRITICAL = 'critical'
    RISK_CHOICES = [
        (RISK_LOW, 'Low'),
        (RISK_MEDIUM, 'Medium'),
        (RISK_HIGH, 'High'),
        (RISK_CRITICAL, 'Critical'),
    ]

    id = models.CharField(max_length=36, primary_key=True, default=new_id, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='health_records')
    # Records outlive the hospital or doctor that wrote them.
    hospital = models.ForeignKey(
        Hospital, null=True, blank=True, on_delete=models.SET_NULL, related_name='health_records'
    )
    doctor = models.ForeignKey(
        Doctor, null=True, blank=True, on_delete=models.SET_NULL, related_name='health_records'
    )
    date_time = models.DateTimeField(default=timezone.now, db_index=True)
    disease_name = models.CharField(max_length=255)
    disease_description = models.TextField()
    treatment = models.TextField(blank=True)
    prescription = models.TextField(blank=True)
    risk_level = models.CharField(max_length=10, choices=RISK_CHOICES, default=RISK_LOW)
    emergency_warnings = models.TextField(null=True, blank=True)
    media_files = models.JSONField(default=list, blank=True)
    is_editable = models.BooleanField(default=True)
    editable_until = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=['patient', 'date_time'], name='record_patient_date_idx'),
            models.Index(fields=['hospital', 'created_at'], name='record_hospital_created_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.disease_name} ({self.patient_id} @ {self.date_time:%Y-%m-%d})"


class DoctorNote(models.Model):
    id = models.CharField(max_length=36, primary_key=True, default=new_id, editable=False)
    health_record = models.ForeignKey(HealthRecord, on_delete=models.CASCADE, related_name='notes')
    doctor = models.ForeignKey(Doctor, null=True, blank=True, on_delete=models.SET_NULL, related_name='notes')
    note = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self) -> str:
        return f"Note on {self.health_record_id} by {self.doctor_id}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.user_id}@{self.created_at:%Y-%m-%d %H:%M:%S}"
