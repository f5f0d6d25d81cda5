from django.urls import path
from . import views

app_name = 'friends'

urlpatterns = [
    # Friends
    path('', views.friend_list, name='friend-list'),
    path('<uuid:friend_id>/', views.remove_friend, name='friend-remove'),

    # Requests
    path('requests/', views.send_request, name='request-send'),
    path('requests/incoming/', views.incoming_requests, name='request-incoming'),
    path('requests/outgoing/', views.outgoing_requests, name='request-outgoing'),
    path('requests/<uuid:request_id>/accept/', views.accept_request, name='request-accept'),
    path('requests/<uuid:request_id>/decline/', views.decline_request, name='request-decline'),
    path('requests/<uuid:request_id>/cancel/', views.cancel_request, name='request-cancel'),
]
