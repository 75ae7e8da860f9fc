# Initial Seizure model.

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("users", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Seizure",
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
                ("chassis_number", models.CharField(max_length=100, unique=True)),
                ("make", models.CharField(max_length=50)),
                ("model", models.CharField(max_length=50)),
                ("vehicle_type", models.CharField(max_length=50)),
                (
                    "plate_number",
                    models.CharField(blank=True, max_length=20, null=True),
                ),
                ("driver_name", models.CharField(max_length=100)),
                ("driver_phone", models.CharField(max_length=20)),
                (
                    "infraction_code",
                    models.CharField(
                        choices=[
                            ("T1_DEFAULT", "Défaut de T1"),
                            ("SMUGGLING", "Contrebande (Art. 429)"),
                            (
                                "UNDECLARED_IMPORT",
                                "Importation sans déclaration (Art. 432)",
                            ),
                            ("DEADLINE_OVERRUN", "Dépassement délai (Art. 296/440)"),
                            ("OTHER", "Autre (préciser)"),
                        ],
                        max_length=30,
                    ),
                ),
                ("infraction_reason", models.CharField(max_length=500)),
                ("location", models.CharField(max_length=200)),
                ("seized_at", models.DateTimeField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("IN_PROGRESS", "Saisie en cours"),
                            ("VALIDATED_FOR_DEPOSIT", "Validé pour dépôt"),
                            ("IN_DEPOSIT", "En dépôt"),
                            ("EXIT_AUTHORIZED", "Sortie autorisée"),
                            ("EXIT_PERFORMED", "Sortie effectuée"),
                            ("AUCTION_SALE", "Vente aux enchères"),
                        ],
                        default="IN_PROGRESS",
                        max_length=30,
                    ),
                ),
                (
                    "agent",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="seizures",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "seizures",
                "ordering": ["-seized_at"],
            },
        ),
        migrations.AddConstraint(
            model_name="seizure",
            constraint=models.CheckConstraint(
                condition=models.Q(
                    status__in=[
                        "IN_PROGRESS",
                        "VALIDATED_FOR_DEPOSIT",
                        "IN_DEPOSIT",
                        "EXIT_AUTHORIZED",
                        "EXIT_PERFORMED",
                        "AUCTION_SALE",
                    ]
                ),
                name="valid_seizure_status",
            ),
        ),
        migrations.AddIndex(
            model_name="seizure",
            index=models.Index(fields=["status"], name="idx_seizure_status"),
        ),
        migrations.AddIndex(
            model_name="seizure",
            index=models.Index(fields=["seized_at"], name="idx_seizure_seized_at"),
        ),
        migrations.AddIndex(
            model_name="seizure",
            index=models.Index(fields=["agent"], name="idx_seizure_agent"),
        ),
    ]
