"""
URL configuration for the HomeSwift messaging service.

The chat API lives under ``/api/chat/``; conversation routes are listed
before message routes because ``<chat_id>/`` would otherwise shadow them.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

from . import views

urlpatterns = [
    path('admin/', admin.site.urls),
    path('ping/', views.PingView.as_view(), name='ping'),
    path('api/chat/', include('conversations.urls')),
    path('api/chat/', include('dmessages.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
