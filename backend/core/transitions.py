# Role: Transition function of the frame state machine. Pure: (state, action) -> (next state, next step) or NoOp.
# The whole interaction graph is the TRANSITIONS table below; any action no rule accepts re-displays the current step.

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from backend.models.state import MAX_RATING, MIN_RATING, EmojiReactions, FrameState, initial_state
from backend.models.step import Step

# Ratings 1..10 do not fit the 4-button cap, so the rating step is split into pages.
# The last slot of every page but the final one is a "next page" button.
RATING_PAGES: Tuple[Tuple[int, ...], ...] = ((1, 2, 3), (4, 5, 6), (7, 8, 9, 10))
NEXT_RATING_PAGE = 11

# Button index -> EmojiReactions field.
EMOJI_BY_ACTION: Dict[int, str] = {
    1: "fire",
    2: "diamond",
    3: "rocket",
    4: "thumbs_up",
}

Accepts = Callable[[FrameState, int], bool]
Apply = Callable[[FrameState, int, str], FrameState]


@dataclass(frozen=True)
class TransitionRule:
    accepts: Accepts
    next_step: Step
    apply: Optional[Apply] = None


@dataclass(frozen=True)
class TransitionResult:
    state: FrameState
    noop: bool = False

    @property
    def step(self) -> Step:
        return self.state.step


def _action_is(expected: int) -> Accepts:
    return lambda state, action: action == expected


def _rating_page(state: FrameState) -> int:
    page = state.rating_page or 0
    return min(page, len(RATING_PAGES) - 1)


def _has_next_rating_page(state: FrameState, action: int) -> bool:
    return action == NEXT_RATING_PAGE and _rating_page(state) < len(RATING_PAGES) - 1


def _connect_wallet(state: FrameState, action: int, wallet_address: str) -> FrameState:
    # Key line: once connected, the address is kept (only restart clears it).
    return state.model_copy(update={"wallet_address": state.wallet_address or wallet_address})


def _hide_usd(state: FrameState, action: int, wallet_address: str) -> FrameState:
    return state.model_copy(update={"show_usd_values": False})


def _show_usd(state: FrameState, action: int, wallet_address: str) -> FrameState:
    return state.model_copy(update={"show_usd_values": True})


def _next_rating_page(state: FrameState, action: int, wallet_address: str) -> FrameState:
    return state.model_copy(update={"rating_page": _rating_page(state) + 1})


def _append_rating(state: FrameState, action: int, wallet_address: str) -> FrameState:
    ratings = tuple(state.ratings or ()) + (action,)
    return state.model_copy(update={"ratings": ratings, "rating_page": None})


def _add_reaction(state: FrameState, action: int, wallet_address: str) -> FrameState:
    reactions = state.emoji_reactions or EmojiReactions()
    field = EMOJI_BY_ACTION[action]
    reactions = reactions.model_copy(update={field: getattr(reactions, field) + 1})
    return state.model_copy(update={"emoji_reactions": reactions})


def _restart(state: FrameState, action: int, wallet_address: str) -> FrameState:
    return initial_state()


TRANSITIONS: Dict[Step, Tuple[TransitionRule, ...]] = {
    Step.INITIAL: (
        TransitionRule(_action_is(1), Step.CONNECT_WALLET),
    ),
    Step.CONNECT_WALLET: (
        TransitionRule(_action_is(1), Step.PORTFOLIO_DISPLAY, _connect_wallet),
    ),
    Step.PORTFOLIO_DISPLAY: (
        TransitionRule(_action_is(1), Step.PORTFOLIO_DISPLAY, _hide_usd),
        TransitionRule(_action_is(2), Step.PORTFOLIO_DISPLAY, _show_usd),
        TransitionRule(_action_is(3), Step.COMMUNITY_RATING),
    ),
    Step.COMMUNITY_RATING: (
        TransitionRule(lambda s, a: MIN_RATING <= a <= MAX_RATING, Step.EMOJI_REACTIONS, _append_rating),
        TransitionRule(_has_next_rating_page, Step.COMMUNITY_RATING, _next_rating_page),
    ),
    Step.EMOJI_REACTIONS: (
        TransitionRule(lambda s, a: a in EMOJI_BY_ACTION, Step.RESULTS_DISPLAY, _add_reaction),
    ),
    Step.RESULTS_DISPLAY: (
        TransitionRule(_action_is(1), Step.NFT_MINTING),
        TransitionRule(_action_is(2), Step.SHARE_RESULTS),
    ),
    Step.NFT_MINTING: (
        TransitionRule(_action_is(1), Step.SHARE_RESULTS),
    ),
    Step.SHARE_RESULTS: (
        TransitionRule(_action_is(1), Step.INITIAL, _restart),
    ),
}


def transition(
    state: FrameState,
    action: Optional[int],
    *,
    wallet_address: str,
) -> TransitionResult:
    # 1) No action -> NoOp (re-display)
    # 2) First rule of the current step that accepts the action wins
    # 3) Apply its effect, then move to its next step
    if action is None:
        return TransitionResult(state=state, noop=True)

    for rule in TRANSITIONS.get(state.step, ()):
        if not rule.accepts(state, action):
            continue
        next_state = rule.apply(state, action, wallet_address) if rule.apply else state
        if next_state.step != rule.next_step:
            next_state = next_state.model_copy(update={"step": rule.next_step})
        return TransitionResult(state=next_state)

    return TransitionResult(state=state, noop=True)
