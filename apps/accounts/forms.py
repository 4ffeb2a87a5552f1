from django import forms
from django.contrib.auth.forms import UserCreationForm
from django.contrib.auth import get_user_model
from django.utils.translation import gettext_lazy as _
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils.text import slugify

from apps.core.models import Company

User = get_user_model()


# LOGIN FORM
class LoginForm(forms.Form):
    email = forms.EmailField(
        label=_('Email Address'),
        max_length=255,
        required=True,
    )

    password = forms.CharField(
        label=_('Password'),
        required=True,
        widget=forms.PasswordInput(),
    )

    remember = forms.BooleanField(
        label=_('Remember me'),
        required=False,
        initial=False,
    )

    def clean_email(self):

        email = self.cleaned_data.get('email', '')
        return email.lower().strip()


# SIGN-UP FORM
class SignUpForm(UserCreationForm):
    """
    Creates a new agency (company) together with its first admin user

    The company name is the one shown in the branding header.
    """

    email = forms.EmailField(
        label=_('Email Address'),
        required=True,
    )

    first_name = forms.CharField(
        label=_('First Name'),
        max_length=50,
        required=True,
    )

    last_name = forms.CharField(
        label=_('Last Name'),
        max_length=50,
        required=False,
    )

    company_name = forms.CharField(
        label=_('Company Name'),
        max_length=200,
        required=True,
    )

    class Meta:
        model = User
        fields = ['email', 'first_name', 'last_name', 'password1', 'password2']

    def clean_email(self):
        email = self.cleaned_data.get('email', '').lower().strip()

        if User.objects.filter(email=email).exists():
            raise ValidationError(
                _('A user with this email already exists.')
            )

        return email

    def clean_company_name(self):
        name = self.cleaned_data.get('company_name', '').strip()

        slug = slugify(name)
        if not slug:
            raise ValidationError(
                _('Company name must contain letters or numbers.')
            )

        # The slug is unique too, so names differing only in punctuation clash
        if Company.objects.filter(name__iexact=name).exists() or Company.objects.filter(slug=slug).exists():
            raise ValidationError(
                _('A company with this name already exists.')
            )

        return name

    def save(self, commit=True):
        user = super().save(commit=False)
        user.role = 'admin'

        if commit:
            # Company post_save seeds the default site types
            with transaction.atomic():
                user.company = Company.objects.create(name=self.cleaned_data['company_name'])
                user.save()

        return user
