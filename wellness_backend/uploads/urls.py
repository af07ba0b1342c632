"""Upload URLs.

Prefix: /api/uploads/  (admin only)
Routes:
    POST   /single/
    POST   /multiple/
    GET    /list/
    GET    /list/<directory>/
    GET    /info/<filename>/
    DELETE /<filename>/
"""

from django.urls import path

from .views import (
    UploadDeleteView,
    UploadInfoView,
    UploadListView,
    UploadMultipleView,
    UploadSingleView,
)

app_name = 'uploads'

urlpatterns = [
    path('single/', UploadSingleView.as_view(), name='single'),
    path('multiple/', UploadMultipleView.as_view(), name='multiple'),
    path('list/', UploadListView.as_view(), name='list'),
    path('list/<str:directory>/', UploadListView.as_view(), name='list-directory'),
    path('info/<str:filename>/', UploadInfoView.as_view(), name='info'),
    path('<str:filename>/', UploadDeleteView.as_view(), name='delete'),
]
