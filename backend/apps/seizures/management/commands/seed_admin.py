"""
Seed the initial administrator account.

Idempotent: an existing account with the same e-mail is left untouched.
Run: python manage.py seed_admin --email admin@douanes.local --password ...
"""

import os

from django.core.management.base import BaseCommand, CommandError

from apps.users.models import User


class Command(BaseCommand):
    help = "Create the initial ADMIN account if it does not exist"

    def add_arguments(self, parser):
        parser.add_argument(
            "--email", default=os.environ.get("SEED_ADMIN_EMAIL", "admin@douanes.local")
        )
        parser.add_argument(
            "--password", default=os.environ.get("SEED_ADMIN_PASSWORD")
        )
        parser.add_argument("--first-name", default="Super")
        parser.add_argument("--last-name", default="Admin")

    def handle(self, *args, **options):
        email = User.objects.normalize_email(options["email"])
        password = options["password"]

        if User.objects.filter(email__iexact=email).exists():
            self.stdout.write(f"Administrator {email} already exists, nothing to do")
            return

        if not password or len(password) < 6:
            raise CommandError(
                "A password of at least 6 characters is required "
                "(--password or SEED_ADMIN_PASSWORD)"
            )

        User.objects.create_superuser(
            email=email,
            password=password,
            first_name=options["first_name"],
            last_name=options["last_name"],
        )
        self.stdout.write(self.style.SUCCESS(f"  ✓ Administrator {email} created"))
