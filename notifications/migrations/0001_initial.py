import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, editable=False, null=True)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("RESERVATION_CONFIRMED", "reservation confirmed"),
                            ("ORDER_READY", "order ready"),
                            ("NEW_RESERVATION", "new reservation"),
                            ("NEW_ORDER", "new order"),
                            ("ORDER_ACCEPTED", "order accepted"),
                            ("ORDER_OUT_FOR_DELIVERY", "order out for delivery"),
                            ("ORDER_DELIVERED", "order delivered"),
                        ],
                        max_length=30,
                    ),
                ),
                ("message", models.TextField(max_length=1000)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "notifications",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "read_at"], name="notifications_user_read_idx"),
                    models.Index(fields=["type"], name="notifications_type_idx"),
                ],
            },
        ),
    ]
