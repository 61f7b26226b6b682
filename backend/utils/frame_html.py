# Role: Presentation of a FrameDescriptor as the fc:frame meta-tag document clients scrape.
# Also builds the landing page (initial frame + OpenGraph tags).

from __future__ import annotations

from html import escape
from typing import List, Optional

from backend.models.frame import MAX_BUTTONS, FrameDescriptor

TITLE = "RateMyBags - Crypto Portfolio Rating"
DESCRIPTION = "Rate your crypto portfolio and share it with the community"


def _meta(prop: str, content: str) -> str:
    return f'    <meta property="{escape(prop)}" content="{escape(content)}" />'


def frame_meta_tags(descriptor: FrameDescriptor) -> List[str]:
    tags = [
        _meta("fc:frame", "vNext"),
        _meta("fc:frame:image", descriptor.image_url),
    ]
    for i, button in enumerate(descriptor.buttons[:MAX_BUTTONS], start=1):
        tags.append(_meta(f"fc:frame:button:{i}", button.label))
    tags.append(_meta("fc:frame:post_url", descriptor.post_url))
    if descriptor.state:
        tags.append(_meta("fc:frame:state", descriptor.state))
    return tags


def render_frame_html(descriptor: FrameDescriptor, *, og_image: Optional[str] = None) -> str:
    head = frame_meta_tags(descriptor)
    if og_image:
        head += [
            _meta("og:title", TITLE),
            _meta("og:description", DESCRIPTION),
            _meta("og:image", og_image),
        ]
        head.append(f"    <title>{escape(TITLE)}</title>")

    return "\n".join(
        [
            "<!DOCTYPE html>",
            "<html>",
            "  <head>",
            *head,
            "  </head>",
            "  <body>",
            "    <h1>RateMyBags</h1>",
            f"    <p>{escape(DESCRIPTION)}. Open in a Farcaster client to interact!</p>",
            "  </body>",
            "</html>",
        ]
    )
