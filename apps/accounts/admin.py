from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserChangeForm, UserCreationForm
from django.utils.translation import gettext_lazy as _
from django.utils.html import format_html
from .models import User



# ADMIN FORMS (email instead of username)
class UserAdminCreationForm(UserCreationForm):

    class Meta:
        model = User
        fields = ('email',)


class UserAdminChangeForm(UserChangeForm):

    class Meta:
        model = User
        fields = '__all__'



# CUSTOM USER ADMIN
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = UserAdminChangeForm
    add_form = UserAdminCreationForm

    list_display = (
        'email',
        'get_full_name_display',
        'company',
        'role_badge',
        'is_active',
        'login_count',
        'date_joined',
    )

    list_display_links = ('email', 'get_full_name_display')

    list_filter = (
        'role',
        'is_active',
        'is_staff',
        'is_superuser',
        'company',
    )
    search_fields = (
        'email',
        'first_name',
        'last_name',
        'company__name',
    )

    ordering = ('-date_joined',)
    list_per_page = 25
    list_select_related = ('company',)


    fieldsets = (
        (_('Login Credentials'), {
            'fields': ('email', 'password'),
            'classes': ('wide',),
            'description': _('Email is used for login. Password is stored encrypted.')
        }),

        (_('Personal Information'), {
            'fields': ('first_name', 'last_name'),
            'classes': ('wide',),
        }),

        (_('Company & Role'), {
            'fields': ('company', 'role'),
            'classes': ('wide',),
        }),

        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),

        (_('Activity Tracking'), {
            'fields': ('login_count', 'last_login_ip', 'date_joined', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    # Fields shown when creating NEW user
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'company', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = ('login_count', 'last_login_ip', 'date_joined', 'last_login')

    def get_full_name_display(self, obj):
        return obj.get_full_name()

    get_full_name_display.short_description = _('Name')

    def role_badge(self, obj):
        colors = {
            'admin': '#dc3545',
            'member': '#17a2b8',
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            colors.get(obj.role, '#6c757d'),
            obj.get_role_display()
        )

    role_badge.short_description = _('Role')
