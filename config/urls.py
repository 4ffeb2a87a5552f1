from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from django.shortcuts import redirect

# Main URL Configuration
# Routes all requests to appropriate apps

urlpatterns = [

    path('admin/', admin.site.urls),
    path('accounts/', include('apps.accounts.urls')),
    path('', lambda request: redirect('core:dashboard') if request.user.is_authenticated else redirect(settings.LOGIN_URL)),
    path('', include('apps.core.urls')),
    path('clients/', include('apps.clients.urls')),

]

if settings.DEBUG:
    # Media files (uploaded company logos)
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
