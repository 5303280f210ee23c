"""Public pages and the authoring admin, rendered with Django templates.

Pages read through the same services as the API. A store failure while
loading page data is logged and rendered as an empty list plus an error
banner; it never turns into a server error.
"""

import logging
from typing import Any, Callable

from django.conf import settings
from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_http_methods, require_POST
from rest_framework.exceptions import ValidationError

from articles import services
from articles.models import ARTICLE_STATUSES, STATUS_PUBLISHED
from articles.tagging import suggest_tags
from authors import services as author_services
from core.health import connection_report
from core.repository import DuplicateRecord, RecordNotFound
from .forms import ArticleForm, article_initial, build_article_payload, form_values, join_tags, split_tags

logger = logging.getLogger(__name__)

PUBLIC_PAGE_SIZE = 9
ADMIN_PAGE_SIZE = 20
RECENT_COUNT = 5

LOAD_ERROR = "Content could not be loaded right now. Please try again later."
SAVE_ERROR = "Failed to save article."
DELETE_ERROR = "Failed to delete article."

ACTION_SAVE = "save"
ACTION_SUGGEST = "suggest"

# Serializer fields that the form edits under another name.
FORM_FIELD_FOR = {"content_blocks": "content"}


def _load(loader: Callable, *args, fallback: Any = None, **kwargs) -> tuple[Any, str | None]:
    """Call ``loader``; on failure log it and return ``fallback`` plus a banner message."""
    try:
        return loader(*args, **kwargs), None
    except Exception:
        logger.exception("Could not load page data via %s", getattr(loader, "__name__", loader))
        return fallback, LOAD_ERROR


def _page_number(request) -> int:
    try:
        return max(1, int(request.GET.get("page", 1)))
    except (TypeError, ValueError):
        return 1


# Public pages


def home(request):
    """Published articles, newest first, with category and search filters."""
    category = request.GET.get("category", "").strip()
    search = request.GET.get("search", "").strip()
    page, error = _load(
        services.list_articles,
        category=category,
        status=STATUS_PUBLISHED,
        search=search,
        page=_page_number(request),
        limit=PUBLIC_PAGE_SIZE,
    )
    return render(request, "portal/home.html", {
        "page": page,
        "articles": page.items if page else [],
        "error": error,
        "category": category,
        "search": search,
    })


def article_detail(request, article_id):
    return _render_public_article(request, article_id=article_id)


def read_article(request, slug):
    return _render_public_article(request, slug=slug)


def _render_public_article(request, **lookup):
    article, error = _load(services.get_published_article, **lookup)
    if error:
        return render(request, "portal/article.html", {"article": None, "error": error}, status=503)
    if article is None:
        raise Http404("Article not found")

    author = None
    if article.author_id:
        try:
            author = author_services.get_author(article.author_id)
        except RecordNotFound:
            author = None
        except Exception:
            logger.exception("Could not load author %s for article %s", article.author_id, article.id)

    canonical_url = settings.API_BASE_URL + reverse("portal:read-article", args=[article.slug])
    return render(request, "portal/article.html", {
        "article": article,
        "author": author,
        "canonical_url": canonical_url,
    })


def authors(request):
    author_list, error = _load(author_services.list_authors, fallback=[])
    return render(request, "portal/authors.html", {"authors": author_list, "error": error})


def test_connection(request):
    report = connection_report()
    return render(request, "portal/test_connection.html", {"report": report}, status=200 if report["success"] else 503)


# Admin pages


def admin_dashboard(request):
    counts, error = _load(services.article_counts, fallback={"total": 0, "published": 0, "draft": 0})
    recent, recent_error = _load(services.list_articles, limit=RECENT_COUNT)
    return render(request, "portal/admin_dashboard.html", {
        "counts": counts,
        "recent": recent.items if recent else [],
        "error": error or recent_error,
    })


def admin_articles(request):
    status = request.GET.get("status", "").strip()
    status_error = None
    if status and status not in ARTICLE_STATUSES:
        status_error = f"Unknown status filter {status!r}; showing all articles."
        status = ""
    page, error = _load(services.list_articles, status=status, page=_page_number(request), limit=ADMIN_PAGE_SIZE)
    return render(request, "portal/admin_articles.html", {
        "page": page,
        "articles": page.items if page else [],
        "status": status,
        "error": error or status_error,
    })


@require_http_methods(["GET", "POST"])
def admin_article_new(request):
    return _article_form(request)


@require_http_methods(["GET", "POST"])
def admin_article_edit(request, article_id):
    try:
        article = services.get_article(article_id)
    except RecordNotFound:
        raise Http404("Article not found")
    except Exception:
        logger.exception("Could not load article %s for editing", article_id)
        messages.error(request, LOAD_ERROR)
        return redirect("portal:admin-articles")
    return _article_form(request, article)


@require_POST
def admin_article_delete(request, article_id):
    try:
        services.delete_article(article_id)
    except RecordNotFound:
        messages.error(request, "Article not found.")
    except Exception:
        logger.exception("Could not delete article %s", article_id)
        messages.error(request, DELETE_ERROR)
    else:
        messages.success(request, "Article deleted.")
    return redirect("portal:admin-articles")


def _article_form(request, article=None):
    """Editing/submitting cycle of the authoring form.

    ``accept_tag`` and ``action=suggest`` keep the form in editing: the page is
    re-rendered unbound with the author's current input. ``action=save``
    validates and submits; failures re-render with errors, success redirects.
    """
    author_list, error = _load(author_services.list_authors, fallback=[])
    form_kwargs = {"authors": author_list, "current_author_id": article.author_id if article else None}
    context = {"article": article, "error": error, "suggested_tags": [], "suggestion_error": None}

    if request.method != "POST":
        initial = article_initial(article) if article else None
        return _render_form(request, ArticleForm(initial=initial, **form_kwargs), context)

    data = request.POST.copy()
    pending = data.getlist("suggested_tags")

    if "accept_tag" in data:
        tag = data["accept_tag"]
        tags = split_tags(data.get("tags", ""))
        if tag not in tags:
            tags.append(tag)
        data["tags"] = join_tags(tags)
        context["suggested_tags"] = [t for t in pending if t != tag]
        return _render_form(request, ArticleForm(initial=form_values(data), **form_kwargs), context)

    if data.get("action", ACTION_SAVE) == ACTION_SUGGEST:
        result = suggest_tags(data.get("content", ""))
        if "tags" in result:
            current = split_tags(data.get("tags", ""))
            context["suggested_tags"] = [t for t in result["tags"] if t not in current]
        else:
            context["suggestion_error"] = result["error"]
        return _render_form(request, ArticleForm(initial=form_values(data), **form_kwargs), context)

    form = ArticleForm(data, **form_kwargs)
    context["suggested_tags"] = pending
    if form.is_valid():
        payload = build_article_payload(form.cleaned_data, existing_blocks=article.content_blocks if article else ())
        try:
            if article:
                services.update_article(article.id, payload)
            else:
                services.create_article(payload)
        except ValidationError as exc:
            _add_api_errors(form, exc.detail)
        except DuplicateRecord:
            form.add_error("slug", "An article with this slug already exists.")
        except Exception:
            logger.exception("Could not save article %s", article.id if article else "(new)")
            form.add_error(None, SAVE_ERROR)
        else:
            messages.success(request, f"Article {'updated' if article else 'created'}.")
            return redirect("portal:admin-articles")
    return _render_form(request, form, context)


def _render_form(request, form, context):
    context["form"] = form
    return render(request, "portal/admin_article_form.html", context)


def _add_api_errors(form, detail) -> None:
    """Show serializer errors next to the matching form fields."""
    if not isinstance(detail, dict):
        form.add_error(None, [str(message) for message in detail])
        return
    for field_name, field_errors in detail.items():
        target = FORM_FIELD_FOR.get(field_name, field_name)
        if target not in form.fields:
            target = None
        if not isinstance(field_errors, list):
            field_errors = [field_errors]
        for message in field_errors:
            form.add_error(target, str(message))
