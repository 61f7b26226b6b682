# Role: Maps (state, token) -> FrameDescriptor: image URL, ordered buttons, post URL, encoded state.
# No I/O here: image URLs only *reference* the renderer endpoints, carrying enough state in the query string
# for the renderer to redraw the same view without any server-side session.

from __future__ import annotations

from typing import Callable, Dict, List, Optional
from urllib.parse import urlencode

import backend.config as config
from backend.core.transitions import NEXT_RATING_PAGE, RATING_PAGES
from backend.models.frame import FrameButton, FrameDescriptor
from backend.models.state import FrameState
from backend.models.step import Step


def _buttons(*labels: str) -> List[FrameButton]:
    # Most steps: button N triggers action N.
    return [FrameButton(label=label, target_index=i) for i, label in enumerate(labels, start=1)]


def _rating_buttons(state: FrameState) -> List[FrameButton]:
    page = min(state.rating_page or 0, len(RATING_PAGES) - 1)
    values = RATING_PAGES[page]
    buttons = [FrameButton(label=str(v), target_index=v) for v in values]
    if page < len(RATING_PAGES) - 1:
        remaining = RATING_PAGES[page + 1 :]
        label = f"{remaining[0][0]}-{remaining[-1][-1]} ▸"
        buttons.append(FrameButton(label=label, target_index=NEXT_RATING_PAGE))
    return buttons


_STATIC_BUTTONS: Dict[Step, List[FrameButton]] = {
    Step.INITIAL: _buttons("Connect Wallet"),
    Step.CONNECT_WALLET: _buttons("Connect Ethereum Wallet"),
    Step.PORTFOLIO_DISPLAY: _buttons("Hide USD", "Show USD", "Continue to Rating"),
    Step.EMOJI_REACTIONS: _buttons("🔥", "💎", "🚀", "👍"),
    Step.RESULTS_DISPLAY: _buttons("Mint as NFT (0.001 ETH)", "Share Results"),
    Step.NFT_MINTING: _buttons("Confirm Mint & Share"),
    Step.SHARE_RESULTS: _buttons("Rate Another Portfolio"),
}


class FrameDescriptorBuilder:
    def __init__(self, host: Optional[str] = None) -> None:
        # Key line: host is read once at construction (process-wide, read-only config).
        self.host = (host or config.HOST).rstrip("/")

    @property
    def post_url(self) -> str:
        return f"{self.host}/api/frame"

    def buttons_for(self, state: FrameState) -> List[FrameButton]:
        if state.step == Step.COMMUNITY_RATING:
            return _rating_buttons(state)
        return list(_STATIC_BUTTONS[state.step])

    def resolve_action(self, state: FrameState, button_index: Optional[int]) -> Optional[int]:
        # Role: pressed position (1-based, as sent by the client) -> logical action of that button.
        if button_index is None:
            return None
        buttons = self.buttons_for(state)
        if not 1 <= button_index <= len(buttons):
            return None
        return buttons[button_index - 1].target_index

    def image_url(self, state: FrameState, token: str) -> str:
        renderers: Dict[Step, Callable[[], str]] = {
            Step.INITIAL: lambda: f"{self.host}/api/og",
            Step.CONNECT_WALLET: lambda: f"{self.host}/images/connect-wallet.png",
            Step.PORTFOLIO_DISPLAY: lambda: self._portfolio_image(state),
            Step.COMMUNITY_RATING: lambda: (
                f"{self.host}/images/rating.png?{urlencode({'page': state.rating_page or 0})}"
            ),
            Step.EMOJI_REACTIONS: lambda: f"{self.host}/images/emoji-reactions.png",
            Step.RESULTS_DISPLAY: lambda: f"{self.host}/api/results?{urlencode({'state': token})}",
            Step.NFT_MINTING: lambda: f"{self.host}/images/nft-minting.png",
            Step.SHARE_RESULTS: lambda: f"{self.host}/api/share?{urlencode({'state': token})}",
        }
        return renderers[state.step]()

    def _portfolio_image(self, state: FrameState) -> str:
        params = {
            "address": state.wallet_address or config.DEMO_WALLET_ADDRESS,
            "showUsd": "true" if state.show_usd_values else "false",
        }
        return f"{self.host}/api/portfolio?{urlencode(params)}"

    def build(self, state: FrameState, token: str) -> FrameDescriptor:
        return FrameDescriptor(
            image_url=self.image_url(state, token),
            buttons=self.buttons_for(state),
            post_url=self.post_url,
            state=token,
        )
