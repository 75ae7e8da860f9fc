"""
User model for the Vehicle Seizure Registry.

Fields: id (UUID), email, first_name, last_name, role, password,
created_at, updated_at. Email unique (used to log in). Role choices
ADMIN, BUREAU_CHIEF, BRIGADE_CHIEF, BRIGADE_AGENT, CONSULTATION_AGENT.
"""

import uuid
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.db import models

from . import services


class Role(models.TextChoices):
    ADMIN = "ADMIN", "Administrateur"
    BUREAU_CHIEF = "BUREAU_CHIEF", "Chef de bureau"
    BRIGADE_CHIEF = "BRIGADE_CHIEF", "Chef de brigade"
    BRIGADE_AGENT = "BRIGADE_AGENT", "Agent de brigade"
    CONSULTATION_AGENT = "CONSULTATION_AGENT", "Agent de consultation"


class UserManager(BaseUserManager):
    """Custom user manager."""

    def create_user(
        self,
        email,
        password=None,
        first_name="",
        last_name="",
        role=Role.CONSULTATION_AGENT,
        **extra_fields,
    ):
        return services.create_user(
            user_model=self.model,
            email=self.normalize_email(email),
            password=password,
            first_name=first_name,
            last_name=last_name,
            role=role,
            using=self._db,
            **extra_fields,
        )

    def create_superuser(self, email, password=None, **extra_fields):
        return services.create_superuser(
            user_model=self.model,
            email=self.normalize_email(email),
            password=password,
            using=self._db,
            **extra_fields,
        )


class User(AbstractBaseUser):
    """Custom User model with UUID primary key and role field."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=100, unique=True)
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    role = models.CharField(max_length=20, choices=Role.choices)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["first_name", "last_name", "role"]

    objects = UserManager()

    class Meta:
        db_table = "users"
        constraints = [
            models.CheckConstraint(
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
            )
        ]

    def __str__(self):
        return self.email

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip() or self.email

    @property
    def is_staff(self):
        """Required for Django admin compatibility."""
        return services.user_is_staff(user=self)

    @property
    def is_superuser(self):
        """Required for Django admin compatibility."""
        return services.user_is_superuser(user=self)

    def has_perm(self, perm, obj=None):
        """Required for Django admin compatibility."""
        return services.user_has_perm(user=self, perm=perm, obj=obj)

    def has_module_perms(self, app_label):
        """Required for Django admin compatibility."""
        return services.user_has_module_perms(user=self, app_label=app_label)
