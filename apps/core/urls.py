from django.urls import path
from . import views


app_name = 'core'

urlpatterns = [
    path('dashboard/', views.dashboard_view, name='dashboard'),
    path('dashboard/branding/', views.branding_view, name='branding'),

    # Site type catalog
    path('site-types/', views.site_type_list_view, name='site_type_list'),
    path('site-types/create/', views.site_type_create_view, name='site_type_create'),
    path('site-types/<int:pk>/edit/', views.site_type_edit_view, name='site_type_edit'),
    path('site-types/<int:pk>/delete/', views.site_type_delete_view, name='site_type_delete'),
]
