from django.core.management.base import BaseCommand, CommandError

from apps.core.models import Company
from apps.core.services import seed_default_site_types


class Command(BaseCommand):
    help = (
        "Create the default site types (DEFAULT_SITE_TYPES) for companies "
        "that are missing them. Existing entries are left untouched."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--company",
            type=str,
            default=None,
            help="Slug of a single company to seed (default: every company)",
        )

    def handle(self, *args, **opts):
        slug = opts.get("company")

        companies = Company.objects.all()
        if slug:
            companies = companies.filter(slug=slug)
            if not companies.exists():
                raise CommandError(f"Company not found: slug={slug}")

        total = 0
        for company in companies:
            created = seed_default_site_types(company)
            total += len(created)
            self.stdout.write(f"{company.name}: {len(created)} site type(s) created")

        self.stdout.write(self.style.SUCCESS(f"Done, {total} site type(s) created"))
