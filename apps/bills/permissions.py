"""
Custom permission classes for bills app.

Object-level checks used by BillViewSet. The services repeat the host
check so they stay safe when called from elsewhere.
"""
from rest_framework.permissions import BasePermission


class IsBillParticipant(BasePermission):
    """
    Permission: User must be the host or a participant of the bill.
    """

    message = 'You are not a participant of this bill.'

    def has_object_permission(self, request, view, obj):
        # obj is a Bill instance
        if obj.is_host(request.user):
            return True
        return any(p.user_id == request.user.id for p in obj.participants.all())


class IsBillHost(BasePermission):
    """
    Permission: User must be the bill host.

    Usage:
        def get_permissions(self):
            if self.action in ['update', 'partial_update', 'destroy']:
                return [IsAuthenticated(), IsBillHost()]
            return super().get_permissions()
    """

    message = 'Only the bill host can perform this action.'

    def has_object_permission(self, request, view, obj):
        return obj.is_host(request.user)
