from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator, RegexValidator
from django.db import models
from django.utils.text import slugify
from django.utils.translation import gettext_lazy as _


hex_color_validator = RegexValidator(
    regex=r'^#(?:[0-9a-fA-F]{3}){1,2}$',
    message=_('Enter a hex color such as #00A3FF.'),
)


class Company(models.Model):
    """Tenant: the agency using the CRM, and the branding its screens show"""

    # Basic Information
    name = models.CharField(max_length=200,unique=True,help_text="Company name shown in the header")
    slug = models.SlugField(max_length=200,unique=True,help_text="URL-friendly name (auto-generated)")

    # Branding
    logo = models.ImageField(upload_to='companies/logos/',null=True,blank=True,help_text="Company logo")
    name_color = models.CharField(max_length=7,default='#1A1A1A',validators=[hex_color_validator],help_text="Hex color of the company name")
    primary_color = models.CharField(max_length=7,default=settings.DEFAULT_PRIMARY_COLOR,validators=[hex_color_validator],help_text="Hex color used as the UI primary color")

    # Status
    is_active = models.BooleanField(default=True,help_text="Is company active?")

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Company"
        verbose_name_plural = "Companies"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_active'], name='company_is_active_idx'),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):

        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def get_logo_url(self):
        """URL of the uploaded logo, None when there is none"""
        return self.logo.url if self.logo else None

    def get_branding(self):

        return {
            'companyName': self.name,
            'companyNameColor': self.name_color,
            'primaryColor': self.primary_color,
            'logo': self.get_logo_url(),
        }


class SiteType(models.Model):
    """Catalog entry: a category of website product and its base price"""

    company = models.ForeignKey(Company,on_delete=models.CASCADE,related_name='site_types',help_text="Which company owns this catalog entry")
    name = models.CharField(max_length=100,help_text="Site type name (e.g. Landing Page, E-commerce)")
    description = models.TextField(blank=True,help_text="Optional description")
    base_value = models.DecimalField(max_digits=12,decimal_places=2,validators=[MinValueValidator(Decimal('0.01'))],
                                     help_text="Base price, used as the default project value")

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Site Type"
        verbose_name_plural = "Site Types"
        ordering = ['base_value', 'name']
        constraints = [
            models.UniqueConstraint(fields=['company', 'name'], name='unique_site_type_name_per_company'),
        ]

    def __str__(self):
        return self.name

    def closed_projects(self):
        """Projects of closed clients that reference this site type"""
        from apps.clients.models import Project

        return Project.objects.filter(client__site_type=self)

    def is_in_use(self):

        return self.closed_projects().exists()

    def to_dict(self):
        return {
            'id': self.pk,
            'name': self.name,
            'description': self.description,
            'baseValue': str(self.base_value),
            'inUse': self.is_in_use(),
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
        }
