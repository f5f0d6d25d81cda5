from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .permissions import IsBillParticipant, IsBillHost
from .serializers import (
    BillFilterSerializer,
    BillCreateSerializer,
    BillUpdateSerializer,
    UpdateStatusSerializer,
    SelectItemSerializer,
    VerifyParticipantPaymentSerializer,
    BillSerializer,
    BillListSerializer,
    BillParticipantSerializer,
    UserCostSerializer,
    ItemShareSerializer,
    ParticipantPaymentSerializer,
)
from .services import (
    bill_queryset,
    create_bill,
    list_bills_for_user,
    update_bill,
    delete_bill,
    update_bill_status,
    toggle_item_selection,
    submit_selections,
    finalize_bill,
    close_bill,
    mark_payment_sent,
    verify_participant_payment,
    get_user_costs,
    get_unclaimed_items,
)
from .exceptions import InvalidParticipantsError


class BillPagination(PageNumberPagination):
    """Custom pagination for bills."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(tags=['bills'])
class BillViewSet(viewsets.ModelViewSet):
    """
    ViewSet for bills.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Bills the user hosts or joined (filterable)
    create: Create a bill with items and invited friends
    retrieve: Bill with participants, items and selections
    update/partial_update: Edit details (host, select stage only)
    destroy: Delete the bill (host)
    """

    serializer_class = BillSerializer
    permission_classes = [IsAuthenticated, IsBillParticipant]
    pagination_class = BillPagination
    lookup_value_regex = (
        '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'
    )

    def get_queryset(self):
        """Bills of the user; query filters only narrow the list."""
        if self.action != 'list':
            return list_bills_for_user(user=self.request.user)

        filter_serializer = BillFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        return list_bills_for_user(
            user=self.request.user,
            **filter_serializer.validated_data
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return BillListSerializer
        return BillSerializer

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['update', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsBillHost()]
        return super().get_permissions()

    def _detail(self, bill_id):
        bill = bill_queryset().get(id=bill_id)
        return BillSerializer(bill, context={'request': self.request}).data

    @extend_schema(request=BillCreateSerializer, responses={201: BillSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new bill."""
        serializer = BillCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            bill = create_bill(created_by=request.user, **serializer.validated_data)
        except InvalidParticipantsError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self._detail(bill.id), status=status.HTTP_201_CREATED)

    @extend_schema(request=BillUpdateSerializer, responses={200: BillSerializer})
    def update(self, request, *args, **kwargs):
        """Edit bill details."""
        bill = self.get_object()

        serializer = BillUpdateSerializer(data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)

        update_bill(bill_id=bill.id, user=request.user, **serializer.validated_data)
        return Response(self._detail(bill.id))

    def destroy(self, request, *args, **kwargs):
        """Delete a bill."""
        bill = self.get_object()
        delete_bill(bill_id=bill.id, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # -------------------------------------------------------------------------
    # Selections
    # -------------------------------------------------------------------------

    @extend_schema(request=SelectItemSerializer, responses={200: BillSerializer})
    @action(detail=True, methods=['post'])
    def select_item(self, request, pk=None):
        """
        Select or deselect an item.

        POST /api/bills/{id}/select_item/
        Body: {"item_id": "...", "selected": true}
        """
        bill = self.get_object()
        serializer = SelectItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item_id = serializer.validated_data['item_id']
        if not bill.items.filter(id=item_id).exists():
            return Response(
                {'error': 'Item does not belong to this bill'},
                status=status.HTTP_400_BAD_REQUEST
            )

        toggle_item_selection(
            item_id=item_id,
            user=request.user,
            selected=serializer.validated_data['selected']
        )
        return Response(self._detail(bill.id))

    @extend_schema(request=None, responses={200: BillParticipantSerializer})
    @action(detail=True, methods=['post'])
    def submit(self, request, pk=None):
        """Lock in the current user's selections."""
        participant = submit_selections(bill_id=pk, user=request.user)
        return Response(BillParticipantSerializer(participant).data)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @extend_schema(request=None, responses={200: BillSerializer})
    @action(detail=True, methods=['post'])
    def finalize(self, request, pk=None):
        """Move the bill to the pay stage (host only)."""
        bill = finalize_bill(bill_id=pk, user=request.user)
        return Response(self._detail(bill.id))

    @extend_schema(request=UpdateStatusSerializer, responses={200: BillSerializer})
    @action(detail=True, methods=['post'], url_path='status')
    def change_status(self, request, pk=None):
        """Advance the bill status (host only, forward moves only)."""
        serializer = UpdateStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        bill = update_bill_status(
            bill_id=pk,
            user=request.user,
            status=serializer.validated_data['status']
        )
        return Response(self._detail(bill.id))

    @extend_schema(request=None, responses={200: BillSerializer})
    @action(detail=True, methods=['post'])
    def close(self, request, pk=None):
        """Close the bill (host only)."""
        bill = close_bill(bill_id=pk, user=request.user)
        return Response(self._detail(bill.id))

    # -------------------------------------------------------------------------
    # Payments
    # -------------------------------------------------------------------------

    @extend_schema(request=None, responses={200: BillParticipantSerializer})
    @action(detail=True, methods=['post'])
    def mark_paid(self, request, pk=None):
        """Report that the current user paid their share."""
        participant = mark_payment_sent(bill_id=pk, user=request.user)
        return Response(BillParticipantSerializer(participant).data)

    @extend_schema(request=VerifyParticipantPaymentSerializer, responses={200: ParticipantPaymentSerializer})
    @action(detail=True, methods=['post'])
    def verify_payment(self, request, pk=None):
        """
        Confirm a participant's payment (host only).

        POST /api/bills/{id}/verify_payment/
        Body: {"user_id": "..."}
        """
        serializer = VerifyParticipantPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = verify_participant_payment(
            bill_id=pk,
            user=request.user,
            participant_user_id=serializer.validated_data['user_id']
        )
        return Response(ParticipantPaymentSerializer(result).data)

    # -------------------------------------------------------------------------
    # Costs
    # -------------------------------------------------------------------------

    @extend_schema(responses={200: UserCostSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def costs(self, request, pk=None):
        """What each participant owes."""
        user_costs = get_user_costs(bill_id=pk, user=request.user)
        return Response(UserCostSerializer(user_costs, many=True).data)

    @extend_schema(responses={200: ItemShareSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def unclaimed(self, request, pk=None):
        """Items nobody selected."""
        items = get_unclaimed_items(bill_id=pk, user=request.user)
        return Response(ItemShareSerializer(items, many=True).data)
