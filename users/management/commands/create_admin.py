"""Create the back office account, or reset it if it already exists."""

from decouple import config
from django.core.management.base import BaseCommand
from users.services import ensure_admin


class Command(BaseCommand):
    help = "Create or reset the admin account used for the back office"

    def add_arguments(self, parser):
        parser.add_argument("--username", default=config("ADMIN_USERNAME", default="admin"))
        parser.add_argument("--email", default=config("ADMIN_EMAIL", default="admin@lumiere.com"))
        parser.add_argument("--password", default=config("ADMIN_PASSWORD", default=""))

    def handle(self, *args, **options):
        password = options["password"]
        if not password:
            self.stderr.write(self.style.ERROR("A password is required (--password or ADMIN_PASSWORD)."))
            return
        user, created = ensure_admin(username=options["username"], email=options["email"], password=password)
        if created:
            self.stdout.write(self.style.SUCCESS(f"Admin user '{user.username}' created."))
        else:
            self.stdout.write(self.style.SUCCESS(f"Admin user '{user.username}' already existed; password reset."))
