from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from social_server.config import config


class Command(BaseCommand):
    help = "Create the default admin account if it does not exist yet."

    def add_arguments(self, parser):
        parser.add_argument("--username", default=config.ADMIN_USERNAME)
        parser.add_argument("--email", default=config.ADMIN_EMAIL)
        parser.add_argument("--password", default=config.ADMIN_PASSWORD)

    def handle(self, *args, **options):
        User = get_user_model()
        username = options["username"]
        if User.objects.filter(username=username).exists():
            self.stdout.write(f"Admin user {username!r} already exists")
            return
        User.objects.create_superuser(username=username, email=options["email"], password=options["password"])
        self.stdout.write(self.style.SUCCESS(f"Admin user created: {username}"))
