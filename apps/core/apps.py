from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - Company model (tenant + branding)
        - SiteType model (catalog of website products)
        - Reporting (dashboard aggregates)
        - Dashboard and branding views
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'

    def ready(self):
        import apps.core.signals
