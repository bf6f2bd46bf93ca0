"""
Management command to create or reset a registry administrator.

Usage:
    python manage.py create_registry_admin --username admin --password secret123
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from accounts.models import User


class Command(BaseCommand):
    help = 'Creates (or resets) a registry administrator account'

    def add_arguments(self, parser):
        parser.add_argument('--username', default='admin')
        parser.add_argument('--password', required=True)
        parser.add_argument('--email', default='')

    def handle(self, *args, **options):
        username = options['username']
        password = options['password']
        email = options['email']

        if len(password) < 6:
            raise CommandError('Password must be at least 6 characters')

        with transaction.atomic():
            user, created = User.objects.get_or_create(
                username=username,
                defaults={'email': email, 'role': User.UserRole.ADMIN},
            )
            if not created and user.role != User.UserRole.ADMIN:
                raise CommandError(f'User {username} exists with role {user.role}')

            user.role = User.UserRole.ADMIN
            user.is_active = True
            user.is_staff = True
            if email:
                user.email = email
            user.set_password(password)
            user.save()

        if created:
            self.stdout.write(self.style.SUCCESS(f'Created administrator: {username}'))
        else:
            self.stdout.write(self.style.WARNING(f'Administrator {username} already existed; password reset'))

        self.stdout.write('Log in with POST /api/auth/admin/login/')
