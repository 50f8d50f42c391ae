"""
Core Models for AgentSpace Django Backend

These are UNMANAGED models that map to existing Supabase PostgreSQL tables.
They do NOT create migrations - Django reads from existing tables.
"""
import uuid

from django.db import models
from django_cte import CTEManager


class Agency(models.Model):
    """
    Represents an insurance agency in the system.
    Maps to: public.agencies
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    name = models.CharField(max_length=255)
    display_name = models.CharField(max_length=255, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Scoreboard settings
    default_scoreboard_start_date = models.DateField(null=True, blank=True)
    scoreboard_agent_visibility = models.BooleanField(
        default=False,
        help_text='Let non-admin agents see the agency-wide scoreboard'
    )

    class Meta:
        managed = False  # Don't create migrations
        db_table = 'agencies'

    def __str__(self):
        return self.display_name or self.name


class User(models.Model):
    """
    Represents a user in the system.
    Maps to: public.users
    """
    ROLE_CHOICES = [
        ('admin', 'Admin'),
        ('agent', 'Agent'),
        ('client', 'Client'),
    ]

    STATUS_CHOICES = [
        ('pre-invite', 'Pre-Invite'),
        ('invited', 'Invited'),
        ('onboarding', 'Onboarding'),
        ('active', 'Active'),
        ('inactive', 'Inactive'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    auth_user_id = models.UUIDField(unique=True, null=True, blank=True)
    email = models.CharField(max_length=255, null=True, blank=True)
    first_name = models.CharField(max_length=255, null=True, blank=True)
    last_name = models.CharField(max_length=255, null=True, blank=True)
    agency = models.ForeignKey(
        Agency,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='users'
    )
    role = models.CharField(max_length=50, choices=ROLE_CHOICES, default='agent')
    is_admin = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    status = models.CharField(max_length=50, choices=STATUS_CHOICES, default='invited')
    perm_level = models.CharField(max_length=50, null=True, blank=True)
    subscription_tier = models.CharField(max_length=50, null=True, blank=True)
    upline = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='downlines'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Recursive downline queries go through django-cte
    objects = CTEManager()

    class Meta:
        managed = False
        db_table = 'users'

    def __str__(self):
        return f"{self.first_name or ''} {self.last_name or ''} ({self.email or 'No email'})".strip()

    @property
    def is_administrator(self) -> bool:
        """Admin flag, admin permission level, or admin role."""
        return bool(self.is_admin) or self.perm_level == 'admin' or self.role == 'admin'


class Carrier(models.Model):
    """
    Represents an insurance carrier.
    Maps to: public.carriers
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        managed = False
        db_table = 'carriers'

    def __str__(self):
        return self.name


class Deal(models.Model):
    """
    Represents an insurance policy/deal.
    Maps to: public.deals
    """
    BILLING_CYCLE_CHOICES = [
        ('monthly', 'Monthly'),
        ('quarterly', 'Quarterly'),
        ('semi-annually', 'Semi-Annually'),
        ('annually', 'Annually'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    agency = models.ForeignKey(
        Agency,
        on_delete=models.CASCADE,
        related_name='deals'
    )
    agent = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='deals'
    )
    carrier = models.ForeignKey(
        Carrier,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='deals'
    )
    policy_number = models.CharField(max_length=255, null=True, blank=True)
    status = models.CharField(
        max_length=255, null=True, blank=True,
        help_text='Raw carrier status string, resolved through status_mapping'
    )
    annual_premium = models.DecimalField(
        max_digits=15, decimal_places=2, null=True, blank=True
    )
    billing_cycle = models.CharField(
        max_length=50, null=True, blank=True,
        help_text='Billing frequency: monthly, quarterly, semi-annually, annually'
    )
    policy_effective_date = models.DateField(null=True, blank=True)
    submission_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        managed = False
        db_table = 'deals'

    def __str__(self):
        return f"{self.policy_number or 'No policy#'} ({self.status or 'no status'})"


class StatusMapping(models.Model):
    """
    Maps carrier-specific status codes to standardized statuses.
    Maps to: public.status_mapping
    """
    IMPACT_CHOICES = [
        ('positive', 'Positive'),
        ('negative', 'Negative'),
        ('neutral', 'Neutral'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    carrier = models.ForeignKey(
        Carrier,
        on_delete=models.CASCADE,
        related_name='status_mappings'
    )
    raw_status = models.CharField(
        max_length=255,
        help_text='The carrier-specific status string'
    )
    standardized_status = models.CharField(
        max_length=50, null=True, blank=True,
        help_text='The normalized status (active, pending, cancelled, lapsed, terminated)'
    )
    impact = models.CharField(
        max_length=20,
        choices=IMPACT_CHOICES,
        default='neutral',
        help_text='Whether deals in this status count as in force'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        managed = False
        db_table = 'status_mapping'
        unique_together = [['carrier', 'raw_status']]

    def __str__(self):
        return f"{self.carrier_id}: {self.raw_status} -> {self.impact}"
