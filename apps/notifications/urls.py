from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    path('', views.notification_list, name='notification-list'),
    path('unread_count/', views.unread_count, name='unread-count'),
    path('read_all/', views.read_all, name='read-all'),
    path('<uuid:notification_id>/read/', views.mark_read, name='mark-read'),
    path('<uuid:notification_id>/', views.remove, name='notification-delete'),
]
