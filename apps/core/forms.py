from decimal import Decimal

from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError
from django.template.defaultfilters import filesizeformat

from .models import Company, SiteType


class SiteTypeForm(forms.ModelForm):
    """Catalog entry. The base value must be positive."""

    class Meta:
        model = SiteType
        fields = ['name', 'description', 'base_value']

        error_messages = {
            'name': {'required': 'Name is required'},
            'base_value': {'required': 'Base value is required'},
        }

    def __init__(self, *args, **kwargs):
        self.company = kwargs.pop('company', None)
        super().__init__(*args, **kwargs)

    def clean_name(self):
        name = self.cleaned_data['name'].strip()

        # company isn't a form field, so the unique constraint is checked here
        duplicates = SiteType.objects.filter(company=self.company, name__iexact=name)
        if self.instance.pk:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise ValidationError('A site type with this name already exists.')

        return name

    def clean_base_value(self):
        base_value = self.cleaned_data['base_value']
        if base_value <= Decimal('0'):
            raise ValidationError('Base value must be greater than zero.')
        return base_value


class CompanyBrandingForm(forms.ModelForm):

    class Meta:
        model = Company
        fields = ['name', 'name_color', 'primary_color', 'logo']

    def clean_logo(self):
        logo = self.cleaned_data.get('logo')

        # Only a fresh upload has a size worth checking
        if logo and hasattr(logo, 'content_type') and logo.size > settings.LOGO_MAX_UPLOAD_SIZE:
            raise ValidationError(
                f'Logo is too large ({filesizeformat(logo.size)}). '
                f'Maximum size is {filesizeformat(settings.LOGO_MAX_UPLOAD_SIZE)}.'
            )
        return logo
