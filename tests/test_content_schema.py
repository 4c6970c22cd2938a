import pytest

from onboard.services.content_schema import (
    MAX_SERVICES,
    HeroContent,
    PortfolioContent,
    ServiceItem,
    ServicesContent,
    parse_content,
)


def test_hero_valid():
    result = parse_content(
        "hero",
        {"title": "Welcome", "subtitle": "My portfolio", "cta_text": "Learn More", "cta_link": "/about"},
    )
    assert result.ok
    assert result.content == HeroContent(
        title="Welcome", subtitle="My portfolio", cta_text="Learn More", cta_link="/about"
    )
    assert result.content.kind == "hero"


def test_hero_errors_accumulate():
    result = parse_content("hero", {"title": "x" * 201, "cta_link": "javascript:alert(1)"})
    assert not result.ok
    assert result.content is None
    assert set(result.errors) == {"hero.title", "hero.subtitle", "hero.cta_link"}


@pytest.mark.parametrize("link", ["/about", "http://example.com", "https://example.com", "#contact"])
def test_hero_link_prefixes(link):
    assert parse_content("hero", {"title": "t", "subtitle": "s", "cta_link": link}).ok


def test_services_valid():
    result = parse_content(
        "services",
        {
            "title": "Services",
            "items": [{"icon": "fa-laptop", "title": "Web", "description": "Web development"}],
        },
    )
    assert result.ok
    assert isinstance(result.content, ServicesContent)
    assert result.content.items == (
        ServiceItem(icon="fa-laptop", title="Web", description="Web development"),
    )


def test_services_item_errors_use_index_paths():
    result = parse_content(
        "services",
        {
            "title": "Services",
            "items": [
                {"icon": "fa-ok", "title": "A", "description": "a"},
                {"icon": "laptop", "title": "", "description": "b"},
            ],
        },
    )
    assert set(result.errors) == {"services.items.1.icon", "services.items.1.title"}


def test_services_item_limit():
    items = [{"icon": "fa-x", "title": "t", "description": "d"}] * (MAX_SERVICES + 1)
    result = parse_content("services", {"title": "Services", "items": items})
    assert "services.items" in result.errors


def test_portfolio_valid_and_image_prefixes():
    result = parse_content(
        "portfolio",
        {
            "title": "Portfolio",
            "items": [
                {"image": "img/portfolio/1.jpg", "title": "One", "category": "Web"},
                {"image": "/img/2.jpg", "title": "Two", "category": "Print", "description": "Nice"},
            ],
            "metadata": {"layout": "grid"},
        },
    )
    assert result.ok
    assert isinstance(result.content, PortfolioContent)
    assert result.content.items[1].description == "Nice"
    assert result.content.metadata == {"layout": "grid"}


def test_portfolio_bad_image_and_missing_items():
    bad = parse_content(
        "portfolio",
        {"title": "P", "items": [{"image": "ftp://x/1.jpg", "title": "One", "category": "Web"}]},
    )
    assert list(bad.errors) == ["portfolio.items.0.image"]
    missing = parse_content("portfolio", {"title": "P"})
    assert missing.errors == {"portfolio.items": ["is missing"]}


def test_metadata_must_be_strings():
    result = parse_content("hero", {"title": "t", "subtitle": "s", "metadata": {"order": 1}})
    assert "hero.metadata.order" in result.errors


def test_non_mapping_payload():
    result = parse_content("hero", ["not", "a", "mapping"])
    assert result.errors == {"hero": ["must be a mapping"]}


def test_unknown_kind_raises():
    with pytest.raises(ValueError):
        parse_content("footer", {})
