from django.urls import path
from . import views

app_name = 'summary'

urlpatterns = [
    path('', views.my_summary, name='my-summary'),
]
