# Models:
# 1. User - Custom user model (email login, company membership)


from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _



# USER MANAGER (handles user creation)
class UserManager(BaseUserManager):
    """
    Custom user manager for User model

    Provides methods to:
    - Create regular users
    - Create superusers (admins)
    - Handle email-based authentication
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user

        Args:
            email (str): User's email address (required)
            password (str): User's password (required)
            **extra_fields: Additional fields (first_name, company, role...)

        Returns:
            User: The created user object

        Raises:
            ValueError: If email is not provided

        Example:
            user = User.objects.create_user(
                email='owner@agency.com',
                password='securepass123',
                first_name='Ana',
                company=company,
                role='admin'
            )
        """
        if not email:
            raise ValueError(_('Users must have an email address'))

        # Normalize email (convert domain to lowercase)
        email = self.normalize_email(email)

        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=email, **extra_fields)

        # Set password (hashed)
        user.set_password(password)
        user.save(using=self._db)

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser (admin)

        Superusers have all permissions and can access admin panel
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', 'admin')

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True'))

        return self.create_user(email, password, **extra_fields)



# USER MODEL
class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model for the CRM

    Features:
    - Email-based authentication (no username)
    - Tenant membership (company field, which carries the branding)
    - Role-based access (admin, member)
    - Login tracking (login count, last login IP)
    """

    ROLE_CHOICES = [
        ('admin', _('Administrator')),
        ('member', _('Member')),
    ]

    email = models.EmailField(_('email address'),unique=True,max_length=255,db_index=True,help_text=_('Required. Used for login.'))
    first_name = models.CharField(_('first name'),max_length=50,blank=True)
    last_name = models.CharField(_('last name'),max_length=50,blank=True)

    # COMPANY & ROLE (Multi-tenancy)
    company = models.ForeignKey('core.Company',on_delete=models.CASCADE,related_name='users',
              null=True,blank=True,verbose_name=_('company'),help_text=_('The agency this user belongs to'))

    role = models.CharField(_('role'),max_length=20,choices=ROLE_CHOICES,
                            default='member',db_index=True,help_text=_('User role: admin (manages catalog and branding) or member'))

    login_count = models.PositiveIntegerField(_('login count'), default=0,help_text=_('Number of times user has logged in'))
    last_login_ip = models.GenericIPAddressField(_('last login IP'), blank=True, null=True)
    is_active = models.BooleanField(_('active'), default=True, help_text=_('Designates whether this user should be treated as active. Unselect this instead of deleting accounts.'))
    is_staff = models.BooleanField(_('staff status'), default=False,help_text=_('Designates whether the user can log into admin site.'))
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    objects = UserManager()

    # Use email as the unique identifier for authentication
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-date_joined']  # Newest first
        indexes = [
            models.Index(fields=['company', 'role'], name='user_company_role_idx'),
        ]

    def __str__(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name} ({self.email})"
        return self.email

    # HELPER METHODS
    def get_full_name(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        elif self.first_name:
            return self.first_name
        return self.email

    def get_short_name(self):

        return self.first_name if self.first_name else self.email

    # ROLE CHECKS
    def is_admin(self):

        return self.role == 'admin' or self.is_superuser

    # ACTIVITY TRACKING
    def increment_login_count(self, ip_address=None):
        """
        Increment login count and update last login IP

        Called from the user_logged_in signal
        """
        self.login_count += 1
        if ip_address:
            self.last_login_ip = ip_address
        self.save(update_fields=['login_count', 'last_login_ip'])

    def get_session_profile(self):
        """
        Profile blob the front-end uses for branding and the login gate

        Returns:
            dict: id, email, name and the company branding fields
        """
        company = self.company
        return {
            'id': self.pk,
            'email': self.email,
            'name': self.get_full_name(),
            'role': self.role,
            'companyName': company.name if company else '',
            'companyNameColor': company.name_color if company else '',
            'logo': company.get_logo_url() if company else None,
            'primaryColor': company.primary_color if company else '',
        }
