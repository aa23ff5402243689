import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Contact",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, editable=False, null=True)),
                ("name", models.CharField(max_length=100)),
                ("email", models.EmailField(max_length=120)),
                ("subject", models.CharField(max_length=150)),
                ("message", models.TextField(max_length=5000)),
            ],
            options={
                "db_table": "contacts",
                "ordering": ["-created_at"],
            },
        ),
    ]
