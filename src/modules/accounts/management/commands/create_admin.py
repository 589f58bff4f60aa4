"""Create the first admin account from settings.

Usage::

    python manage.py create_admin
    python manage.py create_admin --username boss --email boss@example.org --password S3cret!

Does nothing when an admin already exists.
"""

from __future__ import annotations

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.accounts.services import AccountService


class Command(BaseCommand):
    help = "Creates the first admin user (no-op if an admin exists)."

    def add_arguments(self, parser):
        parser.add_argument("--username", default=settings.ADMIN_USERNAME)
        parser.add_argument("--email", default=settings.ADMIN_EMAIL)
        parser.add_argument("--password", default=settings.ADMIN_PASSWORD)
        parser.add_argument("--phone", default=settings.ADMIN_PHONE)

    def handle(self, *args, **options):
        if not options["email"] or not options["password"]:
            raise CommandError("ADMIN_EMAIL and ADMIN_PASSWORD (or --email/--password) are required.")

        service = AccountService(repository=UserDjangoRepository())
        user = service.create_admin(
            username=options["username"],
            email=options["email"],
            password=options["password"],
            phone=options["phone"],
        )
        if user is None:
            self.stdout.write(self.style.WARNING("An admin user already exists."))
            return
        self.stdout.write(self.style.SUCCESS(f"Admin '{user.username}' created."))
