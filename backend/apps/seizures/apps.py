from django.apps import AppConfig


class SeizuresConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.seizures"
    label = "seizures"
    verbose_name = "Saisies de véhicules"
