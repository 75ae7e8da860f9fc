# Initial User model with the five operator roles.

import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                (
                    "last_login",
                    models.DateTimeField(
                        blank=True, null=True, verbose_name="last login"
                    ),
                ),
                ("email", models.EmailField(max_length=100, unique=True)),
                ("first_name", models.CharField(max_length=50)),
                ("last_name", models.CharField(max_length=50)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("ADMIN", "Administrateur"),
                            ("BUREAU_CHIEF", "Chef de bureau"),
                            ("BRIGADE_CHIEF", "Chef de brigade"),
                            ("BRIGADE_AGENT", "Agent de brigade"),
                            ("CONSULTATION_AGENT", "Agent de consultation"),
                        ],
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "users",
            },
        ),
        migrations.AddConstraint(
            model_name="user",
            constraint=models.CheckConstraint(
                condition=models.Q(
                    role__in=[
                        "ADMIN",
                        "BUREAU_CHIEF",
                        "BRIGADE_CHIEF",
                        "BRIGADE_AGENT",
                        "CONSULTATION_AGENT",
                    ]
                ),
                name="valid_role",
            ),
        ),
    ]
