from django.urls import include, path

urlpatterns = [
    path('', include('firmware_upload.urls')),
]
