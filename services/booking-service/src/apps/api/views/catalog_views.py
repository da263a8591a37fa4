"""
Service Catalog API Views
"""

from rest_framework import viewsets, status
from rest_framework.response import Response

from apps.core.services import CatalogService
from apps.api.serializers import ServiceSerializer
from shared.common.permissions import IsAdminOrReadOnly


class ServiceViewSet(viewsets.GenericViewSet):
    """
    Bookable services. Anyone may browse; administrators manage the catalog.
    """

    serializer_class = ServiceSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_queryset(self):
        return CatalogService.list_services(
            service_type=self.request.query_params.get('service_type')
        )

    def list(self, request):
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response(self.get_serializer(page, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(self.get_serializer(CatalogService.get_service(pk)).data)

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = CatalogService.create_service(**serializer.validated_data)
        return Response(self.get_serializer(service).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        service = CatalogService.update_service(pk, **serializer.validated_data)
        return Response(self.get_serializer(service).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        CatalogService.delete_service(pk, deleted_by=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)
