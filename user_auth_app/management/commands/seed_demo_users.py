from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from rest_framework.authtoken.models import Token

from profiles.models import Profile

DEMO_USERS = {
    "admin": {"username": "chef", "password": "asdasd24", "email": "chef@example.com", "is_staff": True},
    "customer": {"username": "andrey", "password": "asdasd", "email": "andrey@example.com", "is_staff": False},
}

class Command(BaseCommand):
    help = "Create or update one admin and one customer demo account."

    def handle(self, *args, **options):
        User = get_user_model()

        for role, cfg in DEMO_USERS.items():
            u, created = User.objects.get_or_create(
                username=cfg["username"],
                defaults={"email": cfg["email"]},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created user '{u.username}'"))
            else:
                self.stdout.write(f"User '{u.username}' already exists")

            # set (or reset) password so the frontend demo buttons keep working
            u.set_password(cfg["password"])
            u.is_staff = cfg["is_staff"]
            u.save(update_fields=["password", "is_staff"])

            prof, _ = Profile.objects.get_or_create(user=u)
            if not prof.email_verified:
                prof.email_verified = True
                prof.save(update_fields=["email_verified"])

            token, _ = Token.objects.get_or_create(user=u)
            self.stdout.write(f"  -> role={role}, token={token.key}")

        self.stdout.write(self.style.SUCCESS("Demo users ready."))
