from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError

from records.models import Doctor, DoctorNote, HealthRecord, Hospital, Patient, User

TABLES = [
    ('Hospitals', Hospital),
    ('Doctors', Doctor),
    ('Patients', Patient),
    ('HealthRecords', HealthRecord),
    ('Users', User),
    ('DoctorNotes', DoctorNote),
]


class Command(BaseCommand):
    help = 'Print the row count of every records table (exits non-zero if the database is unreachable)'

    def handle(self, *args, **options):
        self.stdout.write('Checking database tables...')
        try:
            counts = [(label, model.objects.count()) for label, model in TABLES]
        except DatabaseError as exc:
            raise CommandError(f'Error connecting or querying DB: {exc}') from exc
        for label, count in counts:
            self.stdout.write(f'{label}: {count}')
