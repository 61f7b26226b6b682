# Role: Frame image rendering (1200x630 PNG cards) with Pillow. Invoked only by the image endpoints, never by the
# state machine. Everything a card shows comes from its arguments, so any card can be redrawn from its URL alone.

from __future__ import annotations

from io import BytesIO
from typing import Callable, Dict, Optional, Tuple

import requests
from PIL import Image, ImageDraw, ImageFont

import backend.config as config
from backend.models.portfolio import Portfolio
from backend.models.state import FrameState

WIDTH = 1200
HEIGHT = 630

BACKGROUND = "#f8fafc"
INK = "#0f172a"
MUTED = "#64748b"
HEADER = "#475569"
RULE = "#e2e8f0"
ACCENT = "#3b82f6"
MONEY = "#059669"

MAX_TOKEN_ROWS = 5
_LOGO_SIZE = 30
_LOGO_TIMEOUT_SECONDS = 5

LogoLoader = Callable[[str], Optional[Image.Image]]

# name (as in /images/<name>.png) -> (title, subtitle)
STEP_CARDS: Dict[str, Tuple[str, str]] = {
    "connect-wallet": ("Connect your wallet", "We'll read your token balances to build your portfolio card"),
    "rating": ("Rate this portfolio", "Pick a score from 1 to 10"),
    "emoji-reactions": ("React to this portfolio", "Fire, diamond hands, to the moon, or thumbs up?"),
    "nft-minting": ("Mint your rating as an NFT", "0.001 ETH - confirm to mint and share"),
}

_EMOJI_LABELS = (
    ("fire", "Fire"),
    ("diamond", "Diamond"),
    ("rocket", "Rocket"),
    ("thumbs_up", "Thumbs up"),
)


def _font(size: int) -> ImageFont.ImageFont:
    return ImageFont.load_default(size=size)


def short_address(address: str) -> str:
    if len(address) <= 12:
        return address
    return f"{address[:6]}...{address[-4:]}"


def format_amount(value: float) -> str:
    if value == int(value):
        return f"{int(value):,}"
    return f"{value:,.4f}".rstrip("0").rstrip(".")


def load_logo(url: str) -> Optional[Image.Image]:
    # Role: best-effort logo fetch; any failure means "draw the placeholder".
    if not url:
        return None
    try:
        r = requests.get(url, timeout=_LOGO_TIMEOUT_SECONDS)
        r.raise_for_status()
        logo = Image.open(BytesIO(r.content)).convert("RGBA")
        return logo.resize((_LOGO_SIZE, _LOGO_SIZE))
    except (requests.RequestException, OSError, ValueError) as e:
        if config.DEBUG:
            print(f"IMAGE_RENDERER: logo unavailable ({url}):", e)
        return None


class ImageRenderer:
    def __init__(self, logo_loader: Optional[LogoLoader] = None) -> None:
        # Key line: injectable so tests never touch the network.
        self.logo_loader = logo_loader or load_logo

    def _canvas(self) -> Tuple[Image.Image, ImageDraw.ImageDraw]:
        image = Image.new("RGB", (WIDTH, HEIGHT), BACKGROUND)
        return image, ImageDraw.Draw(image)

    def _centered(self, draw: ImageDraw.ImageDraw, y: int, text: str, size: int, fill: str) -> None:
        font = _font(size)
        left, _, right, _ = draw.textbbox((0, 0), text, font=font)
        draw.text(((WIDTH - (right - left)) / 2, y), text, font=font, fill=fill)

    def _footer(self, draw: ImageDraw.ImageDraw) -> None:
        self._centered(draw, HEIGHT - 60, "RateMyBags - Crypto Portfolio Rating on Farcaster", 18, MUTED)

    def _png(self, image: Image.Image) -> bytes:
        buf = BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()

    def render_og(self) -> bytes:
        image, draw = self._canvas()
        self._centered(draw, 150, "RateMyBags", 60, INK)
        self._centered(draw, 240, "Rate your crypto portfolio and share it with the community", 32, MUTED)
        draw.ellipse(((WIDTH - 200) / 2, 310, (WIDTH + 200) / 2, 510), fill=ACCENT)
        self._centered(draw, HEIGHT - 80, "A Farcaster Frame app for portfolio rating", 24, MUTED)
        return self._png(image)

    def render_step_card(self, name: str) -> bytes:
        title, subtitle = STEP_CARDS[name]
        image, draw = self._canvas()
        self._centered(draw, 220, title, 56, INK)
        self._centered(draw, 310, subtitle, 28, MUTED)
        self._footer(draw)
        return self._png(image)

    def render_portfolio(self, portfolio: Portfolio, show_usd: bool) -> bytes:
        # 1) Header + wallet
        # 2) Table: token / balance / (USD only when requested), at most MAX_TOKEN_ROWS rows
        # 3) Logo per row, placeholder circle when it cannot be loaded
        image, draw = self._canvas()
        self._centered(draw, 50, "Your Crypto Portfolio", 40, INK)
        if portfolio.address:
            self._centered(draw, 105, f"Wallet: {short_address(portfolio.address)}", 20, INK)

        table_top = 170
        header_font = _font(24)
        draw.text((100, table_top), "Token", font=header_font, fill=HEADER)
        draw.text((500, table_top), "Balance", font=header_font, fill=HEADER)
        if show_usd:
            draw.text((800, table_top), "USD Value", font=header_font, fill=HEADER)
        draw.line((100, table_top + 35, WIDTH - 100, table_top + 35), fill=RULE, width=2)

        rows = portfolio.tokens[:MAX_TOKEN_ROWS]
        y = table_top + 55
        for i, token in enumerate(rows):
            logo = self.logo_loader(token.logo_url)
            if logo is not None:
                image.paste(logo, (100, y), logo)
            else:
                draw.ellipse((100, y, 100 + _LOGO_SIZE, y + _LOGO_SIZE), fill=ACCENT)

            draw.text((150, y), token.symbol, font=_font(22), fill=INK)
            draw.text((150, y + 26), token.name, font=_font(16), fill=MUTED)
            draw.text((500, y), format_amount(token.balance), font=_font(22), fill=INK)
            if show_usd:
                draw.text((800, y), f"${format_amount(token.balance_usd)}", font=_font(22), fill=MONEY)

            if i < len(rows) - 1:
                draw.line((100, y + 55, WIDTH - 100, y + 55), fill=RULE, width=1)
            y += 70

        self._footer(draw)
        return self._png(image)

    def render_results(self, state: FrameState) -> bytes:
        image, draw = self._canvas()
        self._centered(draw, 60, "Community Verdict", 44, INK)
        if state.wallet_address:
            self._centered(draw, 120, f"Wallet: {short_address(state.wallet_address)}", 20, MUTED)

        average = state.average_rating()
        score = f"{average:.1f} / 10" if average is not None else "No ratings yet"
        self._centered(draw, 190, score, 72, INK)
        count = len(state.ratings or ())
        self._centered(draw, 285, f"{count} rating{'s' if count != 1 else ''}", 24, MUTED)

        self._draw_reactions(draw, 380, state)
        self._footer(draw)
        return self._png(image)

    def render_share(self, state: FrameState) -> bytes:
        image, draw = self._canvas()
        self._centered(draw, 80, "My bags got rated!", 52, INK)
        average = state.average_rating()
        if average is not None:
            self._centered(draw, 190, f"Score: {average:.1f} / 10", 60, ACCENT)
        if state.emoji_reactions is not None:
            self._centered(draw, 300, f"{state.emoji_reactions.total()} reactions", 28, MUTED)
        self._draw_reactions(draw, 380, state)
        self._centered(draw, 480, "Rate your own portfolio with RateMyBags", 26, INK)
        self._footer(draw)
        return self._png(image)

    def _draw_reactions(self, draw: ImageDraw.ImageDraw, y: int, state: FrameState) -> None:
        reactions = state.emoji_reactions
        if reactions is None:
            return
        column = WIDTH / len(_EMOJI_LABELS)
        font = _font(24)
        for i, (field, label) in enumerate(_EMOJI_LABELS):
            text = f"{label}: {getattr(reactions, field)}"
            left, _, right, _ = draw.textbbox((0, 0), text, font=font)
            x = column * i + (column - (right - left)) / 2
            draw.text((x, y), text, font=font, fill=HEADER)
