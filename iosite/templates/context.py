"""
Template Context - Page metadata passed to every rendered page.
"""

from typing import Any, Dict, List
from dataclasses import dataclass, field, fields


# Site pages default title
DEFAULT_TITLE = "Google I/O 2015"

# Default site description
DESC_DEFAULT = (
    "Google I/O 2015 brings together developers for an immersive,"
    " two-day experience focused on exploring the next generation of "
    "technology, mobile and beyond. Join us online or in person May 28-29, "
    "2015. #io15"
)

# Used when users share an experiment link on social
DESC_EXPERIMENT = (
    "Make music with instruments inspired by material design "
    "for #io15. Play, record and share."
)

# og:image meta tag images
OG_IMAGE_DEFAULT = "images/io15-color.png"
OG_IMAGE_EXPERIMENT = "images/io15-experiment.png"


@dataclass
class PageContext:
    """
    Page rendering context.

    Empty fields are filled in by PageRenderer; fields set by the caller are
    never overwritten.

    Attributes:
        env: App environment ("dev", "stage" or "prod")
        client_id: OAuth client ID
        prefix: URL path prefix
        slug: Page name
        canonical: Canonical page URL
        title: Page title
        desc: Page description
        og_title: Social sharing title
        og_image: Social sharing image
        start_date_str: Conference start, RFC3339
        live_ids: Livestream YouTube video IDs
        extras: Additional template variables
    """

    env: str = ""
    client_id: str = ""
    prefix: str = ""
    slug: str = ""
    canonical: str = ""
    title: str = ""
    desc: str = ""
    og_title: str = ""
    og_image: str = ""
    start_date_str: str = ""
    live_ids: List[str] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_experiment(cls, **kwargs) -> "PageContext":
        """Context for pages shared from the music experiment."""
        kwargs.setdefault("desc", DESC_EXPERIMENT)
        kwargs.setdefault("og_image", OG_IMAGE_EXPERIMENT)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to flat dictionary for Jinja2 rendering.

        Named fields take priority over extras.
        """
        context = dict(self.extras)
        for f in fields(self):
            if f.name != "extras":
                context[f.name] = getattr(self, f.name)
        return context
