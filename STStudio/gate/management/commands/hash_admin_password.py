import getpass

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Print a password hash to put in STUDIO_ADMIN_PASSWORD_HASH."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            help="Password to hash. Prompted for when omitted so it stays out of shell history.",
        )

    def handle(self, *args, **options):
        password = options.get("password")
        if not password:
            password = getpass.getpass("Admin password: ")
            if password != getpass.getpass("Again: "):
                raise CommandError("Passwords do not match.")
        if not password:
            raise CommandError("Refusing to hash an empty password.")
        self.stdout.write(make_password(password))
