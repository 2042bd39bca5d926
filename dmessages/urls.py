from django.urls import path
from . import views

app_name = 'dmessages'

urlpatterns = [
    path('', views.SendMessageView.as_view(), name='message-send'),
    path('unread/<str:user_id>/', views.UnreadCountView.as_view(), name='unread-count'),
    path('<str:chat_id>/read/', views.MarkReadView.as_view(), name='mark-read'),
    path('<str:chat_id>/', views.MessageListView.as_view(), name='chat-messages'),
]
