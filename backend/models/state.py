# Role: Per-session frame state. This is the whole durable record of a session: it is never stored server-side,
# only round-tripped inside the encoded state token. Immutable: transitions return updated copies.

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from backend.models.step import Step

MIN_RATING = 1
MAX_RATING = 10


class EmojiReactions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    fire: int = Field(default=0, ge=0)
    diamond: int = Field(default=0, ge=0)
    rocket: int = Field(default=0, ge=0)
    thumbs_up: int = Field(default=0, ge=0)

    def total(self) -> int:
        return self.fire + self.diamond + self.rocket + self.thumbs_up


class FrameState(BaseModel):
    # Key line: wire keys are camelCase (walletAddress, showUsdValues, ...) so tokens stay compatible with frame clients.
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    step: Step = Step.INITIAL
    wallet_address: Optional[str] = None
    show_usd_values: Optional[bool] = None

    # Absent until the first rating / reaction; never shrink afterwards.
    ratings: Optional[Tuple[int, ...]] = None
    emoji_reactions: Optional[EmojiReactions] = None

    # View cursor for the paginated rating step (frames carry at most 4 buttons).
    rating_page: Optional[int] = Field(default=None, ge=0)

    @field_validator("ratings")
    @classmethod
    def _check_ratings(cls, value: Optional[Tuple[int, ...]]) -> Optional[Tuple[int, ...]]:
        if value is None:
            return value
        for rating in value:
            if not MIN_RATING <= rating <= MAX_RATING:
                raise ValueError(f"rating {rating} outside {MIN_RATING}..{MAX_RATING}")
        return value

    def average_rating(self) -> Optional[float]:
        if not self.ratings:
            return None
        return sum(self.ratings) / len(self.ratings)


def initial_state() -> FrameState:
    return FrameState()
