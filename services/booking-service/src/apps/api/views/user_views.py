"""
User and Authentication API Views
"""

import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from apps.core.services import AuthService, UserService
from apps.api.serializers import (
    UserSerializer,
    RegisterSerializer,
    LoginSerializer,
    UserUpdateSerializer,
    UserRoleSerializer,
)
from shared.common.permissions import IsAdministrative, IsOwnerOrAdmin, IsSuperAdmin

logger = logging.getLogger(__name__)


class UserViewSet(viewsets.GenericViewSet):
    """
    Registration, login/logout and account management.
    """

    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated]
    owner_field = 'id'

    def get_permissions(self):
        if self.action in ('register', 'login'):
            return [AllowAny()]
        if self.action == 'list':
            return [IsAdministrative()]
        if self.action == 'set_role':
            return [IsSuperAdmin()]
        if self.action in ('retrieve', 'partial_update', 'update', 'destroy'):
            return [IsOwnerOrAdmin()]
        return [IsAuthenticated()]

    def get_queryset(self):
        return UserService.list_users(role=self.request.query_params.get('role'))

    def get_object(self):
        user = UserService.get_user(self.kwargs['pk'])
        self.check_object_permissions(self.request, user)
        return user

    def list(self, request):
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response(self.get_serializer(page, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(self.get_serializer(self.get_object()).data)

    def partial_update(self, request, pk=None):
        user = self.get_object()
        serializer = UserUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        user = UserService.update_user(user.id, **serializer.validated_data)
        return Response(self.get_serializer(user).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        user = self.get_object()
        UserService.delete_user(user.id, deleted_by=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ==========================================================================
    # Authentication
    # ==========================================================================

    @action(detail=False, methods=['post'], authentication_classes=[])
    def register(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = AuthService.register(**serializer.validated_data)
        return Response(self.get_serializer(user).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'], authentication_classes=[])
    def login(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.login(**serializer.validated_data)
        result['user'] = self.get_serializer(result['user']).data
        return Response(result)

    @action(detail=False, methods=['post'])
    def logout(self, request):
        AuthService.logout(request.user.token, request.user.expires_at)
        return Response({'success': True, 'message': 'Logged out'})

    @action(detail=False, methods=['get'])
    def me(self, request):
        user = UserService.get_user(request.user.id)
        return Response(self.get_serializer(user).data)

    @action(detail=True, methods=['post'], url_path='role')
    def set_role(self, request, pk=None):
        serializer = UserRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = UserService.set_role(pk, serializer.validated_data['role'])
        return Response(self.get_serializer(user).data)
