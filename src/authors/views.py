"""Author ViewSet backed by the content repository."""

from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import serializers, status

from core.response import BaseViewSet, api_response, deleted_response
from . import services
from .serializers import AuthorSerializer

ID_PARAMETER = OpenApiParameter("id", str, OpenApiParameter.PATH, description="Author id")


class AuthorListSerializer(serializers.Serializer):
    authors = AuthorSerializer(many=True)


@extend_schema_view(
    list=extend_schema(responses=AuthorListSerializer),
    create=extend_schema(request=AuthorSerializer, responses={201: AuthorSerializer}),
    retrieve=extend_schema(parameters=[ID_PARAMETER], responses=AuthorSerializer),
    update=extend_schema(parameters=[ID_PARAMETER], request=AuthorSerializer, responses=AuthorSerializer),
    partial_update=extend_schema(parameters=[ID_PARAMETER], request=AuthorSerializer, responses=AuthorSerializer),
    destroy=extend_schema(parameters=[ID_PARAMETER], responses={200: None}),
)
class AuthorViewSet(BaseViewSet):
    serializer_class = AuthorSerializer
    record_label = "Author"

    # noinspection PyMethodMayBeStatic
    def list(self, request):
        return api_response({"authors": AuthorSerializer(services.list_authors(), many=True).data})

    # noinspection PyMethodMayBeStatic
    def create(self, request):
        author = services.create_author(request.data)
        return api_response(AuthorSerializer(author).data, status=status.HTTP_201_CREATED)

    # noinspection PyMethodMayBeStatic
    def retrieve(self, request, pk=None):
        return api_response(AuthorSerializer(services.get_author(pk)).data)

    # noinspection PyMethodMayBeStatic
    def update(self, request, pk=None):
        """Merge only the supplied fields; omitted fields keep their values."""
        return api_response(AuthorSerializer(services.update_author(pk, request.data)).data)

    partial_update = update

    def destroy(self, request, pk=None):
        services.delete_author(pk)
        return deleted_response(self.record_label)


__all__ = ["AuthorViewSet"]
