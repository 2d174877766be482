from rest_framework import status
from rest_framework.response import Response

from ledger.serializers import (
    CategoryInputSerializer,
    CategorySerializer,
    CategoryUpdateSerializer,
)
from ledger.services import CategoryService
from ledger.views.base import ProfileAPIView


class CategoryListCreateView(ProfileAPIView):
    """
    GET  /categories/ — List categories (``?type=income|expense``).
    POST /categories/ — Create a category. Body: {"name", "type", "icon"?}
    """

    def get(self, request, *args, **kwargs):
        categories = CategoryService.list(self.profile, request.query_params.get("type"))
        return Response(CategorySerializer(categories, many=True).data)

    def post(self, request, *args, **kwargs):
        serializer = CategoryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = CategoryService.create(
            self.profile,
            name=serializer.validated_data["name"],
            category_type=serializer.validated_data["type"],
            icon=serializer.validated_data.get("icon", ""),
        )
        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)


class CategoryDetailView(ProfileAPIView):
    """PUT /categories/<id>/ — Update a category."""

    def put(self, request, category_id, *args, **kwargs):
        serializer = CategoryUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = CategoryService.update(
            self.profile, category_id, **serializer.validated_data
        )
        return Response(CategorySerializer(category).data)
