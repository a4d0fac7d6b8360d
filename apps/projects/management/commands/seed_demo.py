from datetime import date, timedelta

from django.core.management.base import BaseCommand

from apps.identity.models import User
from apps.identity.security import hash_password
from apps.projects.models import Project, Task


class Command(BaseCommand):
    help = 'Seeds the database with a demo user, one project and a few tasks'

    def add_arguments(self, parser):
        parser.add_argument('--email', default='demo@example.com')
        parser.add_argument('--password', default='password1')

    def handle(self, *args, **options):
        email = options['email']

        user, created = User.objects.get_or_create(
            email=email,
            defaults={'password': hash_password(options['password'])},
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f'Created user: {email}'))
        else:
            self.stdout.write(self.style.WARNING(f'User already exists: {email}'))

        project, created = Project.objects.get_or_create(
            userid=user.id,
            name='Getting started',
            defaults={'topic': 'intro'},
        )
        if not created:
            self.stdout.write(self.style.WARNING(f'Project already exists: {project.name}'))
            return

        tasks = [
            {'name': 'Create a project'},
            {'name': 'Add a task', 'deadline': date.today() + timedelta(days=1)},
            {'name': 'Tick it off', 'iscompleted': True},
        ]
        for t in tasks:
            Task.objects.create(project=project, **t)

        self.stdout.write(self.style.SUCCESS(
            f'Created project "{project.name}" with {len(tasks)} tasks'
        ))
