from django.contrib import admin
from django.utils.html import format_html
from .models import Company, SiteType


def _color_swatch(color):
    return format_html(
        '<span style="display: inline-block; width: 14px; height: 14px; '
        'background-color: {}; border-radius: 3px; vertical-align: middle;"></span> {}',
        color,
        color
    )


class SiteTypeInline(admin.TabularInline):

    model = SiteType
    extra = 0
    fields = ['name', 'base_value', 'description']


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):

    list_display = [
        'name',
        'primary_color_display',
        'status_badge',
        'users_count',
        'clients_count',
        'created_at'
    ]
    list_filter = ['is_active', 'created_at']
    search_fields = ['name']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['created_at', 'updated_at']
    inlines = [SiteTypeInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'slug')
        }),
        ('Branding', {
            'fields': ('logo', 'name_color', 'primary_color')
        }),
        ('Status', {
            'fields': ('is_active',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def primary_color_display(self, obj):
        return _color_swatch(obj.primary_color)

    primary_color_display.short_description = 'Primary color'

    def status_badge(self, obj):

        if obj.is_active:
            return format_html(
                '<span style="background-color: #28a745; color: white; '
                'padding: 3px 10px; border-radius: 3px; font-size: 11px;">'
                'Active</span>'
            )
        return format_html(
            '<span style="background-color: #dc3545; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">'
            'Inactive</span>'
        )

    status_badge.short_description = 'Status'

    def users_count(self, obj):
        return obj.users.filter(is_active=True).count()

    users_count.short_description = 'Users'

    def clients_count(self, obj):
        return obj.clients.count()

    clients_count.short_description = 'Clients'


@admin.register(SiteType)
class SiteTypeAdmin(admin.ModelAdmin):

    list_display = ['name', 'company', 'base_value', 'in_use_display', 'updated_at']
    list_filter = ['company']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at', 'updated_at']

    def in_use_display(self, obj):
        count = obj.closed_projects().count()
        if not count:
            return '-'
        return format_html('<span style="color: #667eea; font-weight: bold;">{} projects</span>', count)

    in_use_display.short_description = 'Closed projects'
