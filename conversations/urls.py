from django.urls import path
from . import views

app_name = 'conversations'

urlpatterns = [
    path('chats/<str:user_id>/', views.UserChatListView.as_view(), name='user-chats'),
    path('start/', views.StartChatView.as_view(), name='chat-start'),
]
