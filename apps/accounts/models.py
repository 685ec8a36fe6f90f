from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models
import uuid


class UserRole(models.TextChoices):
    CUSTOMER = 'customer', 'Customer'
    STAFF = 'staff', 'Staff'
    ADMIN = 'admin', 'Admin'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.full_clean(exclude=['password'])
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('user_type', UserRole.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Platform user: a customer, restaurant staff member or admin.

    Staff and admins may be affiliated with one restaurant; the affiliation
    is the scope of containers and rebates they may act upon. Customers
    never carry an affiliation.

    ``is_staff`` keeps its Django meaning (Django admin site access) and is
    unrelated to ``user_type == 'staff'``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)

    user_type = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.CUSTOMER
    )
    restaurant = models.ForeignKey(
        'catalog.Restaurant',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='members'
    )

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['email']),
            models.Index(fields=['user_type', 'restaurant']),
        ]

    def __str__(self):
        return self.email

    def clean(self):
        super().clean()
        if self.user_type == UserRole.CUSTOMER and self.restaurant_id:
            raise ValidationError({
                'restaurant': 'Customers cannot be affiliated with a restaurant.'
            })

    def get_display_name(self):
        """Return full name or email prefix."""
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.email.split('@')[0]

    @property
    def is_customer(self):
        return self.user_type == UserRole.CUSTOMER

    @property
    def is_restaurant_staff(self):
        return self.user_type == UserRole.STAFF

    @property
    def is_platform_admin(self):
        return self.user_type == UserRole.ADMIN
