from django.contrib import admin
from django.utils.html import format_html
from .models import Client, Project


STATUS_COLORS = {
    Client.STATUS_IN_PROGRESS: '#17a2b8',
    Client.STATUS_NEGOTIATING: '#ffc107',
    Client.STATUS_LOST: '#dc3545',
    Client.STATUS_CLOSED: '#28a745',
}


class ProjectInline(admin.StackedInline):
    """
    Terms of the closed project. Projects are created and removed by the
    status changes in the app, so here they can only be edited.
    """

    model = Project
    extra = 0
    can_delete = False
    fields = ['value', 'project_timeline', 'progress_percentage', 'created_at', 'updated_at']
    readonly_fields = ['created_at', 'updated_at']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):

    list_display = [
        'business_name',
        'contact_name',
        'city',
        'contact_date',
        'status_badge',
        'site_type',
        'company',
    ]

    list_filter = [
        'company',
        'status',
        'site_type',
        'contact_date',
    ]

    search_fields = [
        'business_name',
        'contact_name',
        'city',
        'phone',
    ]

    ordering = ['-contact_date']
    list_per_page = 50
    date_hierarchy = 'contact_date'

    fieldsets = [
        ('Basic Information', {
            'fields': ['company', 'business_name', 'contact_name', 'phone', 'city', 'contact_date']
        }),
        ('Pipeline', {
            'fields': ['status', 'site_type']
        }),
        ('Additional Info', {
            'fields': ['notes'],
            'classes': ['collapse'],
        }),
        ('Timestamps', {
            'fields': ['id', 'created_at', 'updated_at'],
            'classes': ['collapse'],
        }),
    ]

    # Status changes go through the app so the project follows them
    readonly_fields = ['id', 'status', 'created_at', 'updated_at']
    inlines = [ProjectInline]

    def status_badge(self, obj):
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('company', 'site_type')


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):

    list_display = ['client', 'site_type', 'value', 'project_timeline', 'progress_display', 'expected_delivery_date']
    list_filter = ['client__company', 'client__site_type']
    search_fields = ['client__business_name', 'client__city']
    readonly_fields = ['client', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        # Removing a project demotes the client, see the closed projects page
        return False

    def progress_display(self, obj):
        color = '#28a745' if obj.is_complete else '#667eea'
        return format_html('<span style="color: {}; font-weight: bold;">{}%</span>', color, obj.progress_percentage)
    progress_display.short_description = 'Progress'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('client', 'client__site_type')
