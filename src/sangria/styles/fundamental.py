"""The fundamental style: no extenders, every node renders structurally."""

from sangria.style import Style

FUNDAMENTAL = Style(
    name="fundamental",
    description="Structural defaults only; no width fitting or alignment",
    author="sangria developers",
)
