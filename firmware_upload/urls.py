from django.urls import path
from . import views

urlpatterns = [
    # Upload page
    path('', views.upload_firmware, name='firmware_upload'),
    path('success/', views.upload_success, name='firmware_upload_success'),

    # Firmware table
    path('firmware/<str:file_name>/status/', views.firmware_status, name='firmware_status'),
    path('api/firmware/', views.firmware_list, name='firmware_list'),
]
