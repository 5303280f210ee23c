"""Seed the FlexPress demo authors and articles."""

from django.core.management.base import BaseCommand

from articles.models import STATUS_DRAFT, STATUS_PUBLISHED
from articles.repository import get_article_repository
from authors.repository import get_author_repository

PLACEHOLDER_IMAGE = "https://placehold.co/1200x600.png"

SEED_AUTHORS = [
    {
        "name": "Jane Doe",
        "email": "jane.doe@example.com",
        "bio": "Technology writer covering AI and the future of media.",
    },
    {
        "name": "John Smith",
        "email": "john.smith@example.com",
        "bio": "Writes about climate, sustainability and everyday green habits.",
    },
    {
        "name": "Emily White",
        "email": "emily.white@example.com",
        "bio": "Workplace and productivity columnist.",
    },
]

SEED_ARTICLES = [
    {
        "title": "The Future of AI in Content Creation",
        "slug": "the-future-of-ai-in-content-creation",
        "summary": "Explore the future of artificial intelligence in content creation and its impact on various industries.",
        "category": "Technology",
        "author_email": "jane.doe@example.com",
        "tags": ["AI", "Technology", "Future"],
        "status": STATUS_PUBLISHED,
        "paragraphs": [
            "Artificial Intelligence is revolutionizing the way we create content. From automated journalism to "
            "AI-powered design tools, the landscape is changing rapidly.",
            "This article explores the potential impacts and ethical considerations of this technological shift. "
            "We will delve into how machine learning models are trained, the current capabilities of generative AI, "
            "and what the future holds for content creators in various industries.",
        ],
    },
    {
        "title": "A Guide to Sustainable Living",
        "slug": "a-guide-to-sustainable-living",
        "summary": "A practical guide with tips for a more sustainable lifestyle to help the environment.",
        "category": "Lifestyle",
        "author_email": "john.smith@example.com",
        "tags": ["Sustainability", "Lifestyle", "Environment"],
        "status": STATUS_PUBLISHED,
        "paragraphs": [
            "Sustainable living is more than just a buzzword; it's a lifestyle choice that can have a profound "
            "impact on our planet.",
            "This guide provides practical tips on how to reduce your carbon footprint, from conscious consumerism "
            "to eco-friendly home practices. Learn about recycling, composting, saving water, and using renewable "
            "energy sources. Every small change contributes to a larger positive impact.",
        ],
    },
    {
        "title": "The Rise of Remote Work: Challenges and Opportunities",
        "slug": "the-rise-of-remote-work",
        "summary": "An analysis of the challenges and opportunities presented by the global shift to remote work.",
        "category": "Business",
        "author_email": "emily.white@example.com",
        "tags": ["Remote Work", "Business", "Productivity"],
        "status": STATUS_DRAFT,
        "paragraphs": [
            "The global pandemic has accelerated the shift towards remote work. This article examines the benefits, "
            "such as flexibility and a better work-life balance, as well as the challenges, including isolation and "
            "cybersecurity risks.",
            "We also look at how companies are adapting their cultures and technologies to support a distributed "
            "workforce effectively. The future of work may be hybrid, and preparation is key.",
        ],
    },
]


def create_seed_authors() -> dict:
    """Create the demo authors if missing and return an email->Author map."""
    repository = get_author_repository()
    authors = {}
    for fields in SEED_AUTHORS:
        author = repository.get_by_field("email", fields["email"])
        if author is None:
            author = repository.create(dict(fields, avatar=""))
        authors[author.email] = author
    return authors


def create_seed_articles(authors: dict) -> dict:
    """Create the demo articles if missing and return a slug->Article map."""
    repository = get_article_repository()
    articles = {}
    for seed in SEED_ARTICLES:
        article = repository.get_by_field("slug", seed["slug"])
        if article is None:
            article = repository.create({
                "title": seed["title"],
                "slug": seed["slug"],
                "summary": seed["summary"],
                "category": seed["category"],
                "author_id": authors[seed["author_email"]].id,
                "tags": list(seed["tags"]),
                "cover_image": PLACEHOLDER_IMAGE,
                "content_blocks": [{"type": "text", "data": p} for p in seed["paragraphs"]],
                "status": seed["status"],
            })
        articles[article.slug] = article
    return articles


class Command(BaseCommand):
    """Management command to seed demo authors and articles."""

    help = (
        "Create the MongoDB indexes and seed the demo authors and articles. "
        "Use --reset to remove previously seeded records first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete the demo authors and articles before seeding.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        self.stdout.write("Ensuring indexes...")
        get_author_repository().ensure_indexes()
        get_article_repository().ensure_indexes()

        if options.get("reset"):
            self._reset_seeded_data()

        self.stdout.write("Seeding demo content...")
        authors = create_seed_authors()
        articles = create_seed_articles(authors)
        self.stdout.write(self.style.SUCCESS(
            f"Seed completed: {len(authors)} authors, {len(articles)} articles."
        ))

    def _reset_seeded_data(self) -> None:
        """Remove only the demo records created by this command."""
        self.stdout.write("Resetting previously seeded content...")

        articles = get_article_repository()
        for seed in SEED_ARTICLES:
            article = articles.get_by_field("slug", seed["slug"])
            if article is not None:
                articles.delete(article.id)

        authors = get_author_repository()
        for seed in SEED_AUTHORS:
            author = authors.get_by_field("email", seed["email"])
            if author is not None:
                authors.delete(author.id)

        self.stdout.write(self.style.WARNING("Seeded content cleared."))
