"""Catalog URLs, one pattern list per resource.

Each list is mounted by the root URLconf under its own prefix:
    /api/services/       services_urlpatterns
    /api/practitioners/  practitioner_urlpatterns
    /api/programs/       program_urlpatterns
    /api/testimonials/   testimonial_urlpatterns

``admin/`` routes come before ``<identifier>/`` so that "admin" is never
read as a slug.
"""

from django.urls import path

from . import views

service_urlpatterns = [
    path('', views.ServiceListView.as_view(), name='service-list'),
    path('admin/', views.ServiceAdminListCreateView.as_view(), name='service-admin'),
    path('admin/<int:pk>/', views.ServiceAdminDetailView.as_view(), name='service-admin-detail'),
    path('admin/<int:pk>/toggle-status/', views.ServiceToggleStatusView.as_view(), name='service-toggle-status'),
    path('<str:identifier>/', views.ServiceDetailView.as_view(), name='service-detail'),
]

practitioner_urlpatterns = [
    path('', views.PractitionerListView.as_view(), name='practitioner-list'),
    path('admin/', views.PractitionerAdminListCreateView.as_view(), name='practitioner-admin'),
    path('admin/<int:pk>/', views.PractitionerAdminDetailView.as_view(), name='practitioner-admin-detail'),
    path(
        'admin/<int:pk>/toggle-status/',
        views.PractitionerToggleStatusView.as_view(),
        name='practitioner-toggle-status',
    ),
    path('<str:identifier>/', views.PractitionerDetailView.as_view(), name='practitioner-detail'),
]

program_urlpatterns = [
    path('', views.ProgramListView.as_view(), name='program-list'),
    path('admin/', views.ProgramAdminListCreateView.as_view(), name='program-admin'),
    path('admin/<int:pk>/', views.ProgramAdminDetailView.as_view(), name='program-admin-detail'),
    path('admin/<int:pk>/toggle-status/', views.ProgramToggleStatusView.as_view(), name='program-toggle-status'),
    path('<str:identifier>/', views.ProgramDetailView.as_view(), name='program-detail'),
]

testimonial_urlpatterns = [
    path('', views.TestimonialListView.as_view(), name='testimonial-list'),
    path('stats/', views.TestimonialStatsView.as_view(), name='testimonial-stats'),
    path('admin/', views.TestimonialAdminListCreateView.as_view(), name='testimonial-admin'),
    path('admin/<int:pk>/', views.TestimonialAdminDetailView.as_view(), name='testimonial-admin-detail'),
    path(
        'admin/<int:pk>/toggle-status/',
        views.TestimonialToggleStatusView.as_view(),
        name='testimonial-toggle-status',
    ),
    path(
        'admin/<int:pk>/toggle-featured/',
        views.TestimonialToggleFeaturedView.as_view(),
        name='testimonial-toggle-featured',
    ),
]
