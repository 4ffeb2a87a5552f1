import uuid
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone
from apps.core.models import Company, SiteType


class Client(models.Model):

    # Status choices (pipeline stages)
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_NEGOTIATING = 'negotiating'
    STATUS_LOST = 'lost'
    STATUS_CLOSED = 'closed'

    STATUS_CHOICES = [
        (STATUS_IN_PROGRESS, 'In Progress'),
        (STATUS_NEGOTIATING, 'Negotiating'),
        (STATUS_LOST, 'Lost'),
        (STATUS_CLOSED, 'Closed'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Basic Information
    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='clients', help_text='Which agency owns this client')
    business_name = models.CharField(max_length=200, help_text='Name of the prospect business')
    contact_name = models.CharField(max_length=200, blank=True, help_text='Person we talk to (optional)')
    phone = models.CharField(max_length=30, help_text='Contact phone number')
    city = models.CharField(max_length=100, help_text='City of the business')
    contact_date = models.DateField(default=timezone.localdate, db_index=True, help_text='When was the first contact')

    # Pipeline
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_NEGOTIATING, db_index=True, help_text='Current pipeline status')
    site_type = models.ForeignKey(SiteType, on_delete=models.SET_NULL, null=True, blank=True, related_name='clients', help_text='Kind of website the client wants')

    # Additional Information
    notes = models.TextField(blank=True, help_text='General notes about this client')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Client'
        verbose_name_plural = 'Clients'
        ordering = ['-contact_date', '-created_at']
        indexes = [
            models.Index(fields=['company', 'status'], name='client_company_status_idx'),
            models.Index(fields=['company', 'contact_date'], name='client_company_date_idx'),
        ]

    def __str__(self):
        """String representation: Business (City) - Status"""
        return f"{self.business_name} ({self.city}) - {self.get_status_display()}"

    @property
    def is_closed(self):
        return self.status == self.STATUS_CLOSED

    def get_project(self):
        """The closed-project facet, None while the client is still in the pipeline"""
        try:
            return self.project
        except Project.DoesNotExist:
            return None

    def to_dict(self):
        project = self.get_project()
        return {
            'id': str(self.pk),
            'businessName': self.business_name,
            'contactName': self.contact_name,
            'phone': self.phone,
            'city': self.city,
            'contactDate': self.contact_date.isoformat(),
            'status': self.status,
            'statusDisplay': self.get_status_display(),
            'siteTypeId': self.site_type_id,
            'notes': self.notes,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
            'project': project.to_dict(include_client=False) if project else None,
        }


class Project(models.Model):
    """
    Commercial terms and delivery progress of a closed client.

    Shares its primary key with the client it extends, and exists only
    while that client's status is "closed".
    """

    client = models.OneToOneField(Client, on_delete=models.CASCADE, primary_key=True, related_name='project', help_text='The closed client this project belongs to')
    value = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0'))], help_text='Contract value')
    project_timeline = models.PositiveIntegerField(default=settings.DEFAULT_PROJECT_TIMELINE_WEEKS, validators=[MinValueValidator(1)], help_text='Development time in weeks')
    progress_percentage = models.PositiveSmallIntegerField(default=0, validators=[MinValueValidator(0), MaxValueValidator(100)], help_text='Completion progress (0-100)')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Project'
        verbose_name_plural = 'Projects'
        ordering = ['-client__contact_date']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(progress_percentage__lte=100),
                name='project_progress_at_most_100',
            ),
            models.CheckConstraint(
                condition=models.Q(project_timeline__gte=1),
                name='project_timeline_at_least_one_week',
            ),
        ]

    def __str__(self):
        return f"{self.client.business_name} - {self.value} ({self.progress_percentage}%)"

    @property
    def site_type(self):
        return self.client.site_type

    @property
    def expected_delivery_date(self):
        """Contact date plus the development timeline"""
        return self.client.contact_date + timedelta(weeks=self.project_timeline)

    @property
    def is_complete(self):
        return self.progress_percentage >= 100

    def to_dict(self, include_client=True):
        data = {
            'id': str(self.pk),
            'siteTypeId': self.client.site_type_id,
            'value': str(self.value),
            'projectTimeline': self.project_timeline,
            'progressPercentage': self.progress_percentage,
            'expectedDeliveryDate': self.expected_delivery_date.isoformat(),
            'isComplete': self.is_complete,
        }
        if include_client:
            client = self.client.to_dict()
            client.pop('project')
            data = {**client, **data}
        return data
