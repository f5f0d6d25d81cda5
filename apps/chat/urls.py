from django.urls import path
from . import views

app_name = 'chat'

urlpatterns = [
    # Bill threads
    path('bills/<uuid:bill_id>/messages/', views.bill_messages, name='bill-messages'),
    path('bills/<uuid:bill_id>/read/', views.bill_read, name='bill-read'),
    path('bills/<uuid:bill_id>/unread_count/', views.bill_unread_count, name='bill-unread-count'),

    # Single messages
    path('messages/<uuid:message_id>/read/', views.message_read, name='message-read'),
    path('messages/<uuid:message_id>/verify/', views.verify_payment, name='message-verify'),
]
