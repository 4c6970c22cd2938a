"""Content section schema (hero / services / portfolio).

Each editable section of the site is a frozen record with its own explicit
fields plus an optional string-to-string ``metadata`` map. Untrusted payloads
are checked at the boundary by `parse_content`; every problem is collected
under a dotted path (``services.items.2.icon``) so an editor form can show
them all at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

__all__ = [
    "TITLE_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "TEXT_MAX_LENGTH",
    "MAX_SERVICES",
    "MAX_PORTFOLIO_ITEMS",
    "HeroContent",
    "ServiceItem",
    "ServicesContent",
    "PortfolioItem",
    "PortfolioContent",
    "Content",
    "ContentValidation",
    "CONTENT_KINDS",
    "parse_content",
]

_logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
TEXT_MAX_LENGTH = 500

MAX_SERVICES = 20
MAX_PORTFOLIO_ITEMS = 50

LINK_PREFIXES = ("/", "http://", "https://", "#")
IMAGE_PREFIXES = ("/", "http://", "https://", "img/")
ICON_PREFIX = "fa-"


@dataclass(frozen=True)
class HeroContent:
    title: str
    subtitle: str
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)
    kind: str = field(default="hero", init=False)


@dataclass(frozen=True)
class ServiceItem:
    icon: str
    title: str
    description: str


@dataclass(frozen=True)
class ServicesContent:
    title: str
    items: Tuple[ServiceItem, ...] = ()
    metadata: Dict[str, str] = field(default_factory=dict)
    kind: str = field(default="services", init=False)


@dataclass(frozen=True)
class PortfolioItem:
    image: str
    title: str
    category: str
    description: Optional[str] = None


@dataclass(frozen=True)
class PortfolioContent:
    title: str
    items: Tuple[PortfolioItem, ...] = ()
    metadata: Dict[str, str] = field(default_factory=dict)
    kind: str = field(default="portfolio", init=False)


Content = Union[HeroContent, ServicesContent, PortfolioContent]


@dataclass
class ContentValidation:
    errors: Dict[str, List[str]] = field(default_factory=dict)
    content: Optional[Content] = None

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, path: str, message: str) -> None:
        self.errors.setdefault(path, []).append(message)


class _Checker:
    """Field readers that record problems instead of raising."""

    def __init__(self, result: ContentValidation) -> None:
        self.result = result

    def text(
        self,
        data: Mapping[str, Any],
        key: str,
        path: str,
        *,
        max_length: int,
        required: bool = True,
    ) -> Optional[str]:
        value = data.get(key)
        if value is None or value == "":
            if required:
                self.result.add(path, "must be filled")
            return None
        if not isinstance(value, str):
            self.result.add(path, "must be a string")
            return None
        if len(value) > max_length:
            self.result.add(path, f"size cannot be greater than {max_length}")
            return None
        return value

    def items(self, data: Mapping[str, Any], path: str, *, max_items: int) -> List[Any]:
        value = data.get("items")
        if value is None:
            self.result.add(path, "is missing")
            return []
        if not isinstance(value, list):
            self.result.add(path, "must be an array")
            return []
        if len(value) > max_items:
            self.result.add(path, f"size cannot be greater than {max_items}")
        return value

    def metadata(self, data: Mapping[str, Any], path: str) -> Dict[str, str]:
        value = data.get("metadata")
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            self.result.add(path, "must be a mapping")
            return {}
        clean: Dict[str, str] = {}
        for key, item in value.items():
            if not isinstance(key, str) or not isinstance(item, str):
                self.result.add(f"{path}.{key}", "keys and values must be strings")
                continue
            clean[key] = item
        return clean


def _parse_hero(data: Mapping[str, Any], check: _Checker) -> Optional[HeroContent]:
    title = check.text(data, "title", "hero.title", max_length=TITLE_MAX_LENGTH)
    subtitle = check.text(data, "subtitle", "hero.subtitle", max_length=DESCRIPTION_MAX_LENGTH)
    cta_text = check.text(
        data, "cta_text", "hero.cta_text", max_length=TEXT_MAX_LENGTH, required=False
    )
    cta_link = check.text(
        data, "cta_link", "hero.cta_link", max_length=TEXT_MAX_LENGTH, required=False
    )
    if cta_link is not None and not cta_link.startswith(LINK_PREFIXES):
        check.result.add("hero.cta_link", "must be a valid URL or path")
    metadata = check.metadata(data, "hero.metadata")
    if not check.result.ok:
        return None
    return HeroContent(
        title=title or "",
        subtitle=subtitle or "",
        cta_text=cta_text,
        cta_link=cta_link,
        metadata=metadata,
    )


def _parse_services(data: Mapping[str, Any], check: _Checker) -> Optional[ServicesContent]:
    title = check.text(data, "title", "services.title", max_length=TITLE_MAX_LENGTH)
    items: List[ServiceItem] = []
    for index, raw in enumerate(check.items(data, "services.items", max_items=MAX_SERVICES)):
        path = f"services.items.{index}"
        if not isinstance(raw, Mapping):
            check.result.add(path, "must be a mapping")
            continue
        icon = check.text(raw, "icon", f"{path}.icon", max_length=TEXT_MAX_LENGTH)
        if icon is not None and not icon.startswith(ICON_PREFIX):
            check.result.add(
                f"{path}.icon", "must be a valid Font Awesome class (e.g., fa-laptop)"
            )
        item_title = check.text(raw, "title", f"{path}.title", max_length=TITLE_MAX_LENGTH)
        description = check.text(
            raw, "description", f"{path}.description", max_length=DESCRIPTION_MAX_LENGTH
        )
        if icon and item_title and description:
            items.append(ServiceItem(icon=icon, title=item_title, description=description))
    metadata = check.metadata(data, "services.metadata")
    if not check.result.ok:
        return None
    return ServicesContent(title=title or "", items=tuple(items), metadata=metadata)


def _parse_portfolio(data: Mapping[str, Any], check: _Checker) -> Optional[PortfolioContent]:
    title = check.text(data, "title", "portfolio.title", max_length=TITLE_MAX_LENGTH)
    items: List[PortfolioItem] = []
    raw_items = check.items(data, "portfolio.items", max_items=MAX_PORTFOLIO_ITEMS)
    for index, raw in enumerate(raw_items):
        path = f"portfolio.items.{index}"
        if not isinstance(raw, Mapping):
            check.result.add(path, "must be a mapping")
            continue
        image = check.text(raw, "image", f"{path}.image", max_length=TEXT_MAX_LENGTH)
        if image is not None and not image.startswith(IMAGE_PREFIXES):
            check.result.add(f"{path}.image", "must be a valid image path or URL")
        item_title = check.text(raw, "title", f"{path}.title", max_length=TITLE_MAX_LENGTH)
        category = check.text(raw, "category", f"{path}.category", max_length=TEXT_MAX_LENGTH)
        description = check.text(
            raw,
            "description",
            f"{path}.description",
            max_length=DESCRIPTION_MAX_LENGTH,
            required=False,
        )
        if image and item_title and category:
            items.append(
                PortfolioItem(
                    image=image, title=item_title, category=category, description=description
                )
            )
    metadata = check.metadata(data, "portfolio.metadata")
    if not check.result.ok:
        return None
    return PortfolioContent(title=title or "", items=tuple(items), metadata=metadata)


_PARSERS: Dict[str, Callable[[Mapping[str, Any], _Checker], Optional[Content]]] = {
    "hero": _parse_hero,
    "services": _parse_services,
    "portfolio": _parse_portfolio,
}

CONTENT_KINDS: Tuple[str, ...] = tuple(_PARSERS)


def parse_content(kind: str, payload: Any) -> ContentValidation:
    """Validate one section payload and build its typed record.

    ``payload`` is the section body (``{"title": ..., "items": [...]}``).
    Unknown kinds raise ``ValueError``; field problems are reported in
    ``errors`` and leave ``content`` unset.
    """
    try:
        parser = _PARSERS[kind]
    except KeyError:
        raise ValueError(
            f"Unknown content kind {kind!r}; expected one of: {', '.join(CONTENT_KINDS)}"
        ) from None
    result = ContentValidation()
    if not isinstance(payload, Mapping):
        result.add(kind, "must be a mapping")
        return result
    result.content = parser(payload, _Checker(result))
    if not result.ok:
        _logger.debug("Rejected %s content: %s", kind, result.errors)
    return result
