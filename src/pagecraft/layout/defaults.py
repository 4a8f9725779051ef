"""Per-kind default and recognised props."""

from types import MappingProxyType
from typing import Mapping

from .models import ComponentKind, Props, PropValue


DEFAULT_PROPS: Mapping[ComponentKind, Mapping[str, PropValue]] = MappingProxyType(
    {
        ComponentKind.CONTAINER: MappingProxyType(
            {"padding": "p-4", "backgroundColor": "bg-transparent", "borderRadius": "rounded-none"}
        ),
        ComponentKind.SECTION: MappingProxyType(
            {"padding": "p-8", "backgroundColor": "bg-background", "borderRadius": "rounded-none"}
        ),
        ComponentKind.FOOTER: MappingProxyType(
            {"text": "© Your Company", "padding": "p-6", "backgroundColor": "bg-muted"}
        ),
        ComponentKind.NAVBAR: MappingProxyType(
            {"backgroundColor": "bg-background", "padding": "p-4"}
        ),
        ComponentKind.CARD: MappingProxyType(
            {
                "padding": "p-6",
                "backgroundColor": "bg-card",
                "borderRadius": "rounded-xl",
                "shadow": "shadow-md",
            }
        ),
        ComponentKind.TEXT: MappingProxyType(
            {"text": "New Text", "color": "text-foreground", "fontSize": "text-base"}
        ),
        ComponentKind.LINK: MappingProxyType(
            {"label": "New Link", "href": "#", "color": "text-primary"}
        ),
        ComponentKind.BUTTON: MappingProxyType(
            {
                "text": "Click Me",
                "backgroundColor": "bg-primary",
                "color": "text-primary-foreground",
                "borderRadius": "rounded-md",
            }
        ),
        ComponentKind.IMAGE: MappingProxyType(
            {"src": "https://placehold.co/600x400", "alt": "Placeholder", "borderRadius": "rounded-md"}
        ),
    }
)

_COMMON = ("backgroundColor", "padding", "borderRadius", "color")

# Keys the properties panel and code generator understand; anything else is kept but ignored.
RECOGNIZED_PROPS: Mapping[ComponentKind, tuple[str, ...]] = MappingProxyType(
    {
        ComponentKind.CONTAINER: _COMMON,
        ComponentKind.SECTION: _COMMON,
        ComponentKind.FOOTER: _COMMON + ("text",),
        ComponentKind.NAVBAR: _COMMON + ("label",),
        ComponentKind.CARD: _COMMON + ("shadow",),
        ComponentKind.TEXT: _COMMON + ("text", "fontSize"),
        ComponentKind.LINK: _COMMON + ("label", "href"),
        ComponentKind.BUTTON: _COMMON + ("text", "label"),
        ComponentKind.IMAGE: ("src", "alt", "borderRadius"),
    }
)


def default_props(kind: ComponentKind) -> Props:
    """Fresh copy of the default props for ``kind``."""
    return dict(DEFAULT_PROPS[kind])


def recognized_props(kind: ComponentKind) -> tuple[str, ...]:
    """Prop keys consumers know how to render for ``kind``."""
    return RECOGNIZED_PROPS[kind]
