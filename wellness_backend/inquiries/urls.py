"""Contact URLs.

Prefix: /api/contact/
Routes:
    POST   /                                 - contact form (public)
    GET    /info/                            - clinic info (public)
    GET    /admin/inquiries/                 - list (admin)
    GET    /admin/inquiries/<id>/            - detail, marks read (admin)
    DELETE /admin/inquiries/<id>/
    PUT    /admin/inquiries/<id>/status/
    POST   /admin/inquiries/<id>/reply/
    GET    /admin/stats/
"""

from django.urls import path

from .views import (
    ContactCreateView,
    ContactInfoView,
    InquiryDetailView,
    InquiryListView,
    InquiryReplyView,
    InquiryStatsView,
    InquiryStatusView,
)

app_name = 'inquiries'

urlpatterns = [
    path('', ContactCreateView.as_view(), name='create'),
    path('info/', ContactInfoView.as_view(), name='info'),
    path('admin/inquiries/', InquiryListView.as_view(), name='admin-list'),
    path('admin/inquiries/<int:pk>/', InquiryDetailView.as_view(), name='admin-detail'),
    path('admin/inquiries/<int:pk>/status/', InquiryStatusView.as_view(), name='admin-status'),
    path('admin/inquiries/<int:pk>/reply/', InquiryReplyView.as_view(), name='admin-reply'),
    path('admin/stats/', InquiryStatsView.as_view(), name='admin-stats'),
]
