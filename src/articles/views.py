"""Article ViewSet backed by the content repository."""

from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status

from core.response import BaseViewSet, api_response, deleted_response, page_response
from . import services
from .serializers import ArticleListQuerySerializer, ArticleListSerializer, ArticleSerializer

ID_PARAMETER = OpenApiParameter("id", str, OpenApiParameter.PATH, description="Article id")


@extend_schema_view(
    list=extend_schema(parameters=[ArticleListQuerySerializer], responses=ArticleListSerializer),
    create=extend_schema(request=ArticleSerializer, responses={201: ArticleSerializer}),
    retrieve=extend_schema(parameters=[ID_PARAMETER], responses=ArticleSerializer),
    update=extend_schema(parameters=[ID_PARAMETER], request=ArticleSerializer, responses=ArticleSerializer),
    partial_update=extend_schema(parameters=[ID_PARAMETER], request=ArticleSerializer, responses=ArticleSerializer),
    destroy=extend_schema(parameters=[ID_PARAMETER], responses={200: None}),
)
class ArticleViewSet(BaseViewSet):
    """List/create/read/update/delete articles.

    PUT and PATCH both merge the supplied fields over the stored article.
    """

    serializer_class = ArticleSerializer
    record_label = "Article"

    # noinspection PyMethodMayBeStatic
    def list(self, request):
        """Return one page of articles, newest first."""
        query = ArticleListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        page = services.list_articles(
            category=params.get("category"),
            status=params.get("status"),
            search=params.get("search"),
            page=params["page"],
            limit=params["limit"],
        )
        return page_response("articles", ArticleSerializer(page.items, many=True).data, page)

    # noinspection PyMethodMayBeStatic
    def create(self, request):
        article = services.create_article(request.data)
        return api_response(ArticleSerializer(article).data, status=status.HTTP_201_CREATED)

    # noinspection PyMethodMayBeStatic
    def retrieve(self, request, pk=None):
        return api_response(ArticleSerializer(services.get_article(pk)).data)

    # noinspection PyMethodMayBeStatic
    def update(self, request, pk=None):
        """Merge only the supplied fields; omitted fields keep their values."""
        article = services.update_article(pk, request.data)
        return api_response(ArticleSerializer(article).data)

    partial_update = update

    def destroy(self, request, pk=None):
        services.delete_article(pk)
        return deleted_response(self.record_label)


__all__ = ["ArticleViewSet"]
