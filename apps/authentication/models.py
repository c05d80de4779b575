"""
Authentication models.
Account is the custom User — covers Customer, Employee and Admin roles.
"""

import uuid
from django.db import models
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager


class AccountManager(BaseUserManager):
    def create_user(self, email, password=None, **extra):
        if not email:
            raise ValueError("Email address is required.")
        user = self.model(email=self.normalize_email(email), **extra)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password, **extra):
        extra.setdefault("is_staff", True)
        extra.setdefault("is_superuser", True)
        extra.setdefault("role", Account.Role.ADMIN)
        return self.create_user(email, password, **extra)


class Account(AbstractBaseUser, PermissionsMixin):
    """Every human actor in SwiftCargo — identified by email."""

    class Role(models.TextChoices):
        CUSTOMER = "customer", "Customer"
        EMPLOYEE = "employee", "Employee"
        ADMIN    = "admin",    "Administrator"

    class Status(models.TextChoices):
        ACTIVE   = "active",   "Active"
        INACTIVE = "inactive", "Inactive"
        PENDING  = "pending",  "Pending Approval"

    id          = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email       = models.EmailField(max_length=254, unique=True)
    first_name  = models.CharField(max_length=60)
    last_name   = models.CharField(max_length=60)
    phone       = models.CharField(max_length=20, blank=True)
    address     = models.TextField(blank=True)
    role        = models.CharField(max_length=10, choices=Role.choices, default=Role.CUSTOMER)
    status      = models.CharField(max_length=10, choices=Status.choices, default=Status.ACTIVE)
    is_staff    = models.BooleanField(default=False)
    created_at  = models.DateTimeField(auto_now_add=True)
    updated_at  = models.DateTimeField(auto_now=True)

    USERNAME_FIELD  = "email"
    EMAIL_FIELD     = "email"
    REQUIRED_FIELDS = ["first_name", "last_name"]

    objects = AccountManager()

    class Meta:
        verbose_name = "Account"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["role"],   name="account_role_idx"),
            models.Index(fields=["status"], name="account_status_idx"),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.role})"

    # Django auth and simplejwt both gate logins on is_active.
    @property
    def is_active(self):
        return self.status == self.Status.ACTIVE

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_employee(self):
        return self.role in (self.Role.EMPLOYEE, self.Role.ADMIN)

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN
