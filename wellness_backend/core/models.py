from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class Role(models.Model):
    """User roles for RBAC (Role-Based Access Control).

    Standard roles: admin, super_admin
    """

    ADMIN = 'admin'
    SUPER_ADMIN = 'super_admin'

    name = models.CharField(max_length=64, unique=True, db_index=True)
    label = models.CharField(max_length=128)

    class Meta:
        db_table = 'core_role'
        ordering = ['name']
        verbose_name = 'Role'
        verbose_name_plural = 'Roles'

    def __str__(self) -> str:
        return self.label


class ClinicUserManager(UserManager):
    """Manager for email-based logins.

    ``username`` is kept from AbstractUser for the Django admin but defaults
    to the normalized email address.
    """

    def _create_user(self, username, email, password, **extra_fields):
        email = self.normalize_email(email).lower()
        username = username or email
        return super()._create_user(username, email, password, **extra_fields)

    def create_user(self, email=None, password=None, **extra_fields):
        username = extra_fields.pop('username', None)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(username, email, password, **extra_fields)

    def create_superuser(self, email=None, password=None, **extra_fields):
        username = extra_fields.pop('username', None)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        if extra_fields.get('role') is None:
            extra_fields['role'], _ = Role.objects.get_or_create(
                name=Role.SUPER_ADMIN,
                defaults={'label': 'Super Admin'},
            )
        return self._create_user(username, email, password, **extra_fields)

    def get_by_natural_key(self, username):
        return self.get(email__iexact=username)


class User(AbstractUser):
    """Back-office user (clinic staff).

    Extends Django's AbstractUser with:
    - email: unique, used as login
    - name: display name shown in the admin panel
    - role: ForeignKey to Role for RBAC
    """

    email = models.EmailField('email address', unique=True)
    name = models.CharField(max_length=150, blank=True, default='')
    role = models.ForeignKey(
        Role,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name='users',
    )

    objects = ClinicUserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'core_user'
        ordering = ['email']
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self) -> str:
        return self.name or self.email

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.lower()
        if not self.username:
            self.username = self.email
        super().save(*args, **kwargs)

    @property
    def role_name(self):
        return getattr(self.role, 'name', None)

    @property
    def is_clinic_admin(self) -> bool:
        return self.role_name in (Role.ADMIN, Role.SUPER_ADMIN)
