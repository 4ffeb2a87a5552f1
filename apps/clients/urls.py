from django.urls import path
from . import views

app_name = 'clients'

urlpatterns = [
    path('', views.client_list_view, name='client_list'),
    path('create/', views.client_create_view, name='client_create'),
    path('export/', views.client_export_view, name='client_export'),

    # Closed projects
    path('closed/', views.project_list_view, name='project_list'),
    path('closed/<uuid:pk>/edit/', views.project_edit_view, name='project_edit'),
    path('closed/<uuid:pk>/delete/', views.project_delete_view, name='project_delete'),

    path('<uuid:pk>/', views.client_detail_view, name='client_detail'),
    path('<uuid:pk>/edit/', views.client_edit_view, name='client_edit'),
    path('<uuid:pk>/delete/', views.client_delete_view, name='client_delete'),
    path('<uuid:pk>/convert/', views.client_convert_view, name='client_convert'),
]
