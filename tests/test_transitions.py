import random

import pytest

from backend.core.transitions import NEXT_RATING_PAGE, RATING_PAGES, TRANSITIONS, transition
from backend.models.state import EmojiReactions, FrameState
from backend.models.step import Step

WALLET = "0x1111111111111111111111111111111111111111"

# (step -> actions the table accepts) for a state sitting on the first rating page.
LEGAL_ACTIONS = {
    Step.INITIAL: {1},
    Step.CONNECT_WALLET: {1},
    Step.PORTFOLIO_DISPLAY: {1, 2, 3},
    Step.COMMUNITY_RATING: set(range(1, 11)) | {NEXT_RATING_PAGE},
    Step.EMOJI_REACTIONS: {1, 2, 3, 4},
    Step.RESULTS_DISPLAY: {1, 2},
    Step.NFT_MINTING: {1},
    Step.SHARE_RESULTS: {1},
}

EXPECTED_NEXT = {
    (Step.INITIAL, 1): Step.CONNECT_WALLET,
    (Step.CONNECT_WALLET, 1): Step.PORTFOLIO_DISPLAY,
    (Step.PORTFOLIO_DISPLAY, 1): Step.PORTFOLIO_DISPLAY,
    (Step.PORTFOLIO_DISPLAY, 2): Step.PORTFOLIO_DISPLAY,
    (Step.PORTFOLIO_DISPLAY, 3): Step.COMMUNITY_RATING,
    (Step.RESULTS_DISPLAY, 1): Step.NFT_MINTING,
    (Step.RESULTS_DISPLAY, 2): Step.SHARE_RESULTS,
    (Step.NFT_MINTING, 1): Step.SHARE_RESULTS,
    (Step.SHARE_RESULTS, 1): Step.INITIAL,
}


def test_every_step_has_rules():
    assert set(TRANSITIONS) == set(Step)


@pytest.mark.parametrize("step", list(Step))
def test_actions_outside_table_are_noops(step):
    state = FrameState(step=step, wallet_address=WALLET if step != Step.INITIAL else None)
    for action in [None, -1, 0, *range(1, 16), 99]:
        if action in LEGAL_ACTIONS[step]:
            continue
        result = transition(state, action, wallet_address=WALLET)
        assert result.noop
        assert result.state == state
        assert result.step == step


@pytest.mark.parametrize("step_action,next_step", list(EXPECTED_NEXT.items()))
def test_table_targets(step_action, next_step):
    step, action = step_action
    result = transition(FrameState(step=step), action, wallet_address=WALLET)
    assert not result.noop
    assert result.step == next_step


def test_initial_to_connect_wallet():
    result = transition(FrameState(), 1, wallet_address=WALLET)
    assert result.state == FrameState(step=Step.CONNECT_WALLET)


def test_connect_wallet_sets_address():
    result = transition(FrameState(step=Step.CONNECT_WALLET), 1, wallet_address=WALLET)
    assert result.state == FrameState(step=Step.PORTFOLIO_DISPLAY, wallet_address=WALLET)


def test_usd_toggle_keeps_step_and_wallet():
    state = FrameState(step=Step.PORTFOLIO_DISPLAY, wallet_address=WALLET)
    shown = transition(state, 2, wallet_address=WALLET).state
    assert shown.show_usd_values is True
    hidden = transition(shown, 1, wallet_address=WALLET).state
    assert hidden.show_usd_values is False
    assert hidden.wallet_address == WALLET
    assert hidden.step == Step.PORTFOLIO_DISPLAY


def test_rating_appends():
    result = transition(FrameState(step=Step.COMMUNITY_RATING, ratings=()), 5, wallet_address=WALLET)
    assert result.state == FrameState(step=Step.EMOJI_REACTIONS, ratings=(5,))


def test_rating_appends_to_existing():
    state = FrameState(step=Step.COMMUNITY_RATING, ratings=(3, 9))
    assert transition(state, 10, wallet_address=WALLET).state.ratings == (3, 9, 10)


def test_rating_field_absent_until_rated():
    state = transition(FrameState(step=Step.PORTFOLIO_DISPLAY, wallet_address=WALLET), 3, wallet_address=WALLET).state
    assert state.ratings is None
    assert state.emoji_reactions is None


@pytest.mark.parametrize("action", [0, 11 + len(RATING_PAGES), 99, -3])
def test_rating_length_unchanged_for_illegal_actions(action):
    state = FrameState(step=Step.COMMUNITY_RATING, ratings=(4,))
    result = transition(state, action, wallet_address=WALLET)
    assert len(result.state.ratings) == len(state.ratings)
    assert result.noop


@pytest.mark.parametrize("action", [None, -3, 0, *range(1, 11), NEXT_RATING_PAGE, 99])
def test_rating_length_grows_only_for_rating_values(action):
    # With pagination, "length unchanged" no longer means "illegal": the next-page button is legal
    # but only moves the view cursor. A rating value 1-10 is the only action that adds an entry.
    state = FrameState(step=Step.COMMUNITY_RATING, ratings=(4,))
    result = transition(state, action, wallet_address=WALLET)
    grew = len(result.state.ratings) - len(state.ratings)
    if action is not None and 1 <= action <= 10:
        assert grew == 1
        assert result.state.ratings[-1] == action
    else:
        assert grew == 0
        assert result.noop == (action != NEXT_RATING_PAGE)


def test_rating_pages_advance_without_touching_ratings():
    state = FrameState(step=Step.COMMUNITY_RATING, ratings=(2,))
    first = transition(state, NEXT_RATING_PAGE, wallet_address=WALLET)
    assert first.state.rating_page == 1
    assert first.state.step == Step.COMMUNITY_RATING
    assert first.state.ratings == (2,)

    last = transition(first.state, NEXT_RATING_PAGE, wallet_address=WALLET).state
    assert last.rating_page == len(RATING_PAGES) - 1

    past_end = transition(last, NEXT_RATING_PAGE, wallet_address=WALLET)
    assert past_end.noop
    assert past_end.state == last


def test_rating_clears_page_cursor():
    state = FrameState(step=Step.COMMUNITY_RATING, rating_page=2)
    assert transition(state, 8, wallet_address=WALLET).state.rating_page is None


@pytest.mark.parametrize("action,field", [(1, "fire"), (2, "diamond"), (3, "rocket"), (4, "thumbs_up")])
def test_emoji_reaction_increments_mapped_counter(action, field):
    result = transition(FrameState(step=Step.EMOJI_REACTIONS, ratings=(5,)), action, wallet_address=WALLET)
    assert result.step == Step.RESULTS_DISPLAY
    reactions = result.state.emoji_reactions
    assert getattr(reactions, field) == 1
    assert reactions.total() == 1


def test_emoji_out_of_range_is_noop():
    state = FrameState(step=Step.EMOJI_REACTIONS, ratings=(5,))
    result = transition(state, 99, wallet_address=WALLET)
    assert result.noop
    assert result.state == state
    assert result.step == Step.EMOJI_REACTIONS


def test_restart_clears_everything():
    state = FrameState(
        step=Step.SHARE_RESULTS,
        wallet_address=WALLET,
        show_usd_values=True,
        ratings=(1, 2),
        emoji_reactions=EmojiReactions(fire=4),
    )
    assert transition(state, 1, wallet_address=WALLET).state == FrameState(step=Step.INITIAL)


def test_transition_is_pure():
    state = FrameState(step=Step.COMMUNITY_RATING, ratings=(1,))
    first = transition(state, 6, wallet_address=WALLET)
    second = transition(state, 6, wallet_address=WALLET)
    assert first == second
    assert state.ratings == (1,)


def test_counters_never_decrease_over_random_walk():
    rng = random.Random(1234)
    state = FrameState()
    for _ in range(2000):
        action = rng.choice([None, 0, 1, 1, 2, 3, 4, 5, 7, 10, 11, 12, 99])
        before = state
        result = transition(state, action, wallet_address=WALLET)
        state = result.state

        if before.step == Step.SHARE_RESULTS and not result.noop:
            # Restart is the only transition allowed to clear accumulated fields.
            assert state == FrameState()
            continue

        assert len(state.ratings or ()) >= len(before.ratings or ())
        if before.emoji_reactions is not None:
            for field in ("fire", "diamond", "rocket", "thumbs_up"):
                assert getattr(state.emoji_reactions, field) >= getattr(before.emoji_reactions, field)
        if before.wallet_address is not None:
            assert state.wallet_address == before.wallet_address
