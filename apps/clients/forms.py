from decimal import Decimal

from django import forms
from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.core.models import SiteType
from .models import Client


def _site_types(company):
    return SiteType.objects.filter(company=company) if company else SiteType.objects.none()


class ClientForm(forms.ModelForm):
    """
    Create/edit a client. value and project_timeline only matter when the
    status is "closed" and are optional even then (the site type's base
    value and the default timeline are used).
    """

    value = forms.DecimalField(required=False, max_digits=12, decimal_places=2, min_value=Decimal('0'))
    project_timeline = forms.IntegerField(required=False, min_value=1)

    class Meta:
        model = Client
        fields = ['business_name', 'contact_name', 'phone', 'city', 'contact_date', 'status', 'site_type', 'notes']

        error_messages = {
            'business_name': {'required': 'Business name is required', 'max_length': 'Business name is too long (max 200 characters)'},
            'phone': {'required': 'Phone number is required'},
            'city': {'required': 'City is required'},
        }

    def __init__(self, *args, **kwargs):
        self.company = kwargs.pop('company', None)
        super().__init__(*args, **kwargs)

        self.fields['site_type'].queryset = _site_types(self.company)
        self.fields['contact_date'].required = False

        if not self.instance.pk:
            self.fields['status'].initial = Client.STATUS_NEGOTIATING

    def clean_business_name(self):
        return self.cleaned_data['business_name'].strip()

    def clean_phone(self):
        phone = self.cleaned_data.get('phone', '').strip()
        if not any(char.isdigit() for char in phone):
            raise ValidationError('Phone number must contain digits')
        return phone

    def clean_contact_date(self):
        contact_date = self.cleaned_data.get('contact_date')
        if contact_date:
            return contact_date
        # Left empty: keep the stored date, or today for a new client
        return self.instance.contact_date if self.instance.pk else timezone.localdate()

    def clean(self):
        cleaned_data = super().clean()

        if cleaned_data.get('status') == Client.STATUS_CLOSED and not cleaned_data.get('site_type'):
            self.add_error('site_type', 'Select the site type of the closed project.')

        return cleaned_data

    def client_data(self):
        """cleaned_data restricted to the client columns"""
        return {field: self.cleaned_data.get(field) for field in self.Meta.fields}

    def terms(self):
        return {
            'value': self.cleaned_data.get('value'),
            'project_timeline': self.cleaned_data.get('project_timeline'),
        }


class ConvertClientForm(forms.Form):
    site_type = forms.ModelChoiceField(queryset=SiteType.objects.none(), error_messages={'required': 'Select a site type'})
    value = forms.DecimalField(required=False, max_digits=12, decimal_places=2, min_value=Decimal('0'))
    project_timeline = forms.IntegerField(required=False, min_value=1)

    def __init__(self, *args, **kwargs):
        company = kwargs.pop('company', None)
        super().__init__(*args, **kwargs)
        self.fields['site_type'].queryset = _site_types(company)


class ProjectTermsForm(forms.Form):
    """Edit dialog of a closed project: any subset of the three terms"""

    value = forms.DecimalField(required=False, max_digits=12, decimal_places=2, min_value=Decimal('0'))
    project_timeline = forms.IntegerField(required=False, min_value=1)
    progress_percentage = forms.IntegerField(required=False, min_value=0, max_value=100)

    def clean(self):
        cleaned_data = super().clean()
        if not self.errors and all(value is None for value in cleaned_data.values()):
            raise ValidationError('Nothing to update.')
        return cleaned_data


class ClientFilterForm(forms.Form):

    ORDER_CHOICES = [
        ('desc', 'Newest contact first'),
        ('asc', 'Oldest contact first'),
    ]

    search = forms.CharField(required=False)
    status = forms.ChoiceField(required=False, choices=[('', 'All')] + Client.STATUS_CHOICES)
    order = forms.ChoiceField(required=False, choices=ORDER_CHOICES)


class ProjectFilterForm(forms.Form):
    search = forms.CharField(required=False)
    site_type = forms.ModelChoiceField(required=False, queryset=SiteType.objects.none())

    def __init__(self, *args, **kwargs):
        company = kwargs.pop('company', None)
        super().__init__(*args, **kwargs)
        self.fields['site_type'].queryset = _site_types(company)
