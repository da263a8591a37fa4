"""
Feedback and Notification API Views
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.core.services import FeedbackService, NotificationService
from apps.api.serializers import FeedbackSerializer, NotificationSerializer
from shared.common.permissions import IsOwnerOrAdmin
from .filters import NotificationFilter


class FeedbackViewSet(viewsets.GenericViewSet):
    """
    User feedback. Users manage their own entries; administrators see all.
    """

    serializer_class = FeedbackSerializer
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action in ('retrieve', 'update', 'partial_update', 'destroy'):
            return [IsOwnerOrAdmin()]
        return [IsAuthenticated()]

    def get_queryset(self):
        if self.request.user.is_admin:
            return FeedbackService.list_feedback()
        return FeedbackService.list_feedback(user_id=self.request.user.id)

    def get_object(self):
        feedback = FeedbackService.get_feedback(self.kwargs['pk'])
        self.check_object_permissions(self.request, feedback)
        return feedback

    def list(self, request):
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response(self.get_serializer(page, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(self.get_serializer(self.get_object()).data)

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        feedback = FeedbackService.create_feedback(user_id=request.user.id, **serializer.validated_data)
        return Response(self.get_serializer(feedback).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        feedback = self.get_object()
        serializer = self.get_serializer(feedback, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        feedback = FeedbackService.update_feedback(feedback.id, **serializer.validated_data)
        return Response(self.get_serializer(feedback).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        feedback = self.get_object()
        FeedbackService.delete_feedback(feedback.id, deleted_by=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class NotificationViewSet(viewsets.GenericViewSet):
    """
    In-app notifications of the current user.
    """

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = NotificationFilter

    def get_queryset(self):
        return NotificationService.list_for_user(self.request.user.id)

    def list(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        return self.get_paginated_response(self.get_serializer(page, many=True).data)

    def retrieve(self, request, pk=None):
        notification = NotificationService.get_for_user(pk, request.user.id)
        return Response(self.get_serializer(notification).data)

    def destroy(self, request, pk=None):
        NotificationService.delete(pk, request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        notification = NotificationService.mark_read(pk, request.user.id)
        return Response(self.get_serializer(notification).data)
