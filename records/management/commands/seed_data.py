"""
Management command to reset the database to a demo data set.

Everything in the records tables is deleted first, along with every
account that is not a superuser.  The demo users all
share the password ``password123``.
"""
import random
from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, transaction
from django.utils import timezone

from records.models import AuditEvent, Doctor, DoctorNote, HealthRecord, Hospital, Patient, User
from records.services.health_records import EDIT_WINDOW
from records.services.users import create_user

DEMO_PASSWORD = 'password123'

HOSPITALS = [
    {
        'hospital_id': 'HOSP001',
        'name': 'Chikkamagalur District Hospital',
        'location': 'Chikkamagalur, Karnataka',
        'contact_number': '+91 8262 220100',
        'email': 'contact@cdh.gov.in',
    },
    {
        'hospital_id': 'HOSP002',
        'name': 'Sri Siddhartha Medical College',
        'location': 'Chikkamagalur, Karnataka',
        'contact_number': '+91 8262 221456',
        'email': 'info@ssmch.ac.in',
    },
]

# (name, specialization, index into HOSPITALS)
DOCTORS = [
    ('Dr. Rajesh Kumar', 'Cardiology', 0),
    ('Dr. Priya Sharma', 'Neurology', 0),
    ('Dr. Arjun Reddy', 'Orthopedics', 0),
    ('Dr. Lakshmi Rao', 'Pediatrics', 0),
    ('Dr. Suresh Naik', 'General Medicine', 0),
    ('Dr. Manjunath Gowda', 'Surgery', 1),
    ('Dr. Sneha Patil', 'Gynecology', 1),
    ('Dr. Vikram Shetty', 'Dermatology', 1),
    ('Dr. Anitha Murthy', 'Ophthalmology', 1),
    ('Dr. Kiran Hegde', 'ENT', 1),
]

FIRST_NAMES = [
    'Arun', 'Bhavani', 'Chetan', 'Deepa', 'Esha', 'Farhan', 'Geeta', 'Hari', 'Indira', 'Jagdish',
    'Kavya', 'Lakshmana', 'Manoj', 'Nandini', 'Omar', 'Pooja', 'Qasim', 'Radha', 'Sanjay', 'Tanvi',
    'Uma', 'Vijay', 'Waqar', 'Yashoda', 'Zara',
]
LAST_NAMES = [
    'Acharya', 'Bhat', 'Desai', 'Gowda', 'Hegde', 'Iyer', 'Joshi', 'Kulkarni', 'Murthy', 'Naik',
    'Patel', 'Reddy', 'Shetty', 'Rao', 'Verma',
]
BLOOD_GROUPS = ['A+', 'A-', 'B+', 'B-', 'O+', 'O-', 'AB+', 'AB-']
GENDERS = ['Male', 'Female']

# (name, description, risk level, warning)
DISEASES = [
    ('Acute Bronchitis', 'Inflammation of the bronchial tubes', 'medium', 'Monitor breathing difficulty'),
    ('Hypertension', 'Elevated blood pressure', 'high', 'Regular BP monitoring required'),
    ('Type 2 Diabetes', 'Chronic metabolic disorder', 'high', 'Maintain blood sugar levels'),
    ('Migraine', 'Severe recurring headaches', 'low', ''),
    ('Gastritis', 'Stomach lining inflammation', 'low', 'Avoid spicy foods'),
    ('Arthritis', 'Joint inflammation', 'medium', 'Physical therapy recommended'),
    ('Asthma', 'Respiratory condition', 'medium', 'Keep inhaler available'),
    ('Dengue Fever', 'Mosquito-borne viral infection', 'high', 'Monitor platelet count'),
    ('Pneumonia', 'Lung infection', 'high', 'Complete antibiotic course'),
    ('Thyroid Disorder', 'Hormone imbalance', 'medium', 'Regular medication required'),
    ('Urinary Tract Infection', 'Bacterial infection of urinary system', 'low', 'Increase water intake'),
    ('Anemia', 'Low hemoglobin levels', 'medium', 'Iron supplementation needed'),
    ('Appendicitis', 'Inflammation of appendix', 'critical', 'Immediate surgical intervention required'),
    ('Fracture (Radius)', 'Broken bone in forearm', 'medium', 'Keep cast dry'),
    ('Common Cold', 'Viral upper respiratory infection', 'low', ''),
]

TREATMENTS = [
    'Prescribed antibiotics and rest',
    'Lifestyle modifications and medication',
    'Insulin therapy and diet control',
    'Pain management and rest',
    'Antacids and dietary changes',
    'Physical therapy sessions',
    'Bronchodilators and steroids',
    'Supportive care and hydration',
    'Antibiotics and oxygen therapy',
    'Hormone replacement therapy',
    'Antibiotics course',
    'Iron supplements and diet',
    'Surgical removal',
    'Casting and immobilization',
    'Symptomatic treatment',
]


class Command(BaseCommand):
    help = ('Delete all records data and every non-superuser account, then load the '
            'Chikkamagalur demo data set')

    def add_arguments(self, parser):
        parser.add_argument('--patients', type=int, default=200, help='number of patients to create')
        parser.add_argument('--seed', type=int, default=None, help='random seed for a reproducible data set')

    def handle(self, *args, **options):
        if options['patients'] < 1:
            raise CommandError('--patients must be at least 1')
        rng = random.Random(options['seed'])
        try:
            with transaction.atomic():
                self.clear()
                hospitals = self.create_hospitals()
                doctors = self.create_doctors(hospitals)
                patients = self.create_patients(rng, options['patients'])
                count = self.create_health_records(rng, hospitals, doctors, patients)
                self.stdout.write(self.style.SUCCESS(f'Created {count} health records'))
                self.create_demo_users(patients[0])
        except DatabaseError as exc:
            raise CommandError(f'Seed failed: {exc}') from exc

        self.stdout.write(self.style.SUCCESS('Database seeded successfully'))
        self.stdout.write('Demo credentials:')
        self.stdout.write(f'  doctor:   DOC001 / {DEMO_PASSWORD}')
        self.stdout.write(f'  patient:  {patients[0].patient_id} / {DEMO_PASSWORD}')
        self.stdout.write(f'  hospital: HOSP001 / {DEMO_PASSWORD}')

    def clear(self):
        for model in (AuditEvent, DoctorNote, HealthRecord, Patient, Doctor, Hospital):
            model.objects.all().delete()
        # superusers from createsuperuser survive a reseed
        User.objects.filter(is_superuser=False).delete()
        self.stdout.write('Cleared existing data')

    def create_hospitals(self):
        hospitals = Hospital.objects.bulk_create([Hospital(**data) for data in HOSPITALS])
        self.stdout.write(self.style.SUCCESS(f'Created {len(hospitals)} hospitals'))
        return hospitals

    def create_doctors(self, hospitals):
        doctors = []
        for idx, (name, specialization, h) in enumerate(DOCTORS, start=1):
            doctors.append(Doctor(
                doctor_id=f'DOC{idx:03d}',
                name=name,
                specialization=specialization,
                hospital=hospitals[h],
                contact_number=f'+91 98{idx:08d}',
                email=name.lower().replace('dr. ', '').replace(' ', '.') + '@hospital.com',
            ))
        doctors = Doctor.objects.bulk_create(doctors)
        self.stdout.write(self.style.SUCCESS(f'Created {len(doctors)} doctors'))
        return doctors

    def create_patients(self, rng, n):
        patients = []
        for i in range(n):
            first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
            patients.append(Patient(
                patient_id=f'PT{i + 1:04d}',
                name=f'{first} {last}',
                age=rng.randint(10, 79),
                gender=rng.choice(GENDERS),
                blood_group=rng.choice(BLOOD_GROUPS),
                phone=f'+91 {rng.randint(1000000000, 9999999999)}',
                email=f'{first.lower()}.{last.lower()}{i}@email.com',
                address=f'{rng.randint(1, 999)}, MG Road, Chikkamagalur, Karnataka',
                emergency_contact=f'+91 {rng.randint(1000000000, 9999999999)}',
            ))
        patients = Patient.objects.bulk_create(patients)
        self.stdout.write(self.style.SUCCESS(f'Created {len(patients)} patients'))
        return patients

    def create_health_records(self, rng, hospitals, doctors, patients):
        """One to five records per patient, dated within the last year.

        Each patient is treated at a single hospital by that hospital's
        doctors.  Only records dated today are still inside their edit
        window.
        """
        now = timezone.now()
        by_hospital = {h.id: [d for d in doctors if d.hospital_id == h.id] for h in hospitals}
        records = []
        for patient in patients:
            hospital = rng.choice(hospitals)
            for _ in range(rng.randint(1, 5)):
                name, description, risk, warning = rng.choice(DISEASES)
                days_ago = rng.randint(0, 364)
                editable = days_ago == 0
                records.append(HealthRecord(
                    patient=patient,
                    hospital=hospital,
                    doctor=rng.choice(by_hospital[hospital.id]),
                    date_time=now - timedelta(days=days_ago),
                    disease_name=name,
                    disease_description=description,
                    treatment=rng.choice(TREATMENTS),
                    prescription='Medication prescribed as per treatment protocol',
                    risk_level=risk,
                    emergency_warnings=warning or None,
                    is_editable=editable,
                    editable_until=now + EDIT_WINDOW if editable else None,
                    created_at=now,
                    updated_at=now,
                ))
        HealthRecord.objects.bulk_create(records, batch_size=500)
        return len(records)

    def create_demo_users(self, first_patient):
        create_user(role=User.ROLE_DOCTOR, role_id='DOC001', password=DEMO_PASSWORD,
                    name='Dr. Rajesh Kumar', email='rajesh.kumar@hospital.com')
        create_user(role=User.ROLE_PATIENT, role_id=first_patient.patient_id, password=DEMO_PASSWORD,
                    name=first_patient.name, phone=first_patient.phone, age=first_patient.age)
        create_user(role=User.ROLE_HOSPITAL, role_id='HOSP001', password=DEMO_PASSWORD,
                    name='Admin - CDH', email='admin@cdh.gov.in')
        self.stdout.write(self.style.SUCCESS('Created demo users'))
