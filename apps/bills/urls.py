from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'bills'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.BillViewSet, basename='bill')

urlpatterns = [
    # Bill ViewSet routes
    # GET    /api/bills/              - List user's bills
    # POST   /api/bills/              - Create bill
    # GET    /api/bills/{id}/         - Get bill details
    # PUT    /api/bills/{id}/         - Update bill (host)
    # PATCH  /api/bills/{id}/         - Partial update (host)
    # DELETE /api/bills/{id}/         - Delete bill (host)

    # Custom bill actions
    # POST   /api/bills/{id}/select_item/    - Select/deselect an item
    # POST   /api/bills/{id}/submit/         - Submit selections
    # POST   /api/bills/{id}/finalize/       - Move to pay (host)
    # POST   /api/bills/{id}/status/         - Advance status (host)
    # POST   /api/bills/{id}/close/          - Close (host)
    # POST   /api/bills/{id}/mark_paid/      - Report own payment
    # POST   /api/bills/{id}/verify_payment/ - Verify a participant (host)
    # GET    /api/bills/{id}/costs/          - Cost breakdown
    # GET    /api/bills/{id}/unclaimed/      - Items nobody selected

    # Include router URLs
    path('', include(router.urls)),
]
