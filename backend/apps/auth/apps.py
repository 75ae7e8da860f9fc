from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.auth"
    # "auth" is taken by django.contrib.auth
    label = "authentication"
    verbose_name = "Authentification"
