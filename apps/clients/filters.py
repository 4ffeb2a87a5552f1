from django.db.models import Q


def search_clients(clients, term):
    """
    Case-insensitive substring match on business name, contact name or city.
    A blank term returns the queryset unchanged.
    """
    term = (term or '').strip()
    if not term:
        return clients

    return clients.filter(
        Q(business_name__icontains=term) |
        Q(contact_name__icontains=term) |
        Q(city__icontains=term)
    )


def sort_by_contact_date(clients, order='desc'):
    # Ties keep the most recently created first
    if order == 'asc':
        return clients.order_by('contact_date', '-created_at')
    return clients.order_by('-contact_date', '-created_at')


def filter_projects(projects, term=None, site_type_id=None):
    """Closed-projects page: the same text search, plus the site type"""
    term = (term or '').strip()
    if term:
        projects = projects.filter(
            Q(client__business_name__icontains=term) |
            Q(client__contact_name__icontains=term) |
            Q(client__city__icontains=term)
        )

    if site_type_id:
        projects = projects.filter(client__site_type_id=site_type_id)

    return projects
