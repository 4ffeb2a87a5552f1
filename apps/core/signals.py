from django.db.models import ProtectedError
from django.db.models.signals import post_save, pre_delete
from django.dispatch import receiver

from .models import Company, SiteType
from .services import seed_default_site_types


# SIGNAL 1: SEED THE CATALOG OF NEW COMPANIES
@receiver(post_save, sender=Company)
def seed_company_site_types(sender, instance, created, raw=False, **kwargs):
    # raw is True while loading fixtures
    if created and not raw:
        seed_default_site_types(instance)


# SIGNAL 2: PROTECT SITE TYPES USED BY CLOSED PROJECTS
@receiver(pre_delete, sender=SiteType)
def protect_site_type_in_use(sender, instance, origin=None, **kwargs):
    # Deleting the whole company takes its catalog and clients with it
    origin_model = getattr(origin, 'model', type(origin))
    if origin is not None and origin_model is not SiteType:
        return

    # Runs for admin and queryset deletes too, not only the service
    projects = instance.closed_projects()
    if projects.exists():
        raise ProtectedError(
            f'Site type "{instance.name}" is used by {projects.count()} closed project(s)',
            set(projects),
        )
