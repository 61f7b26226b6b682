# Role: Streamlit frame preview.
# - Backend is authoritative (every click is a POST /api/frame round-trip).
# - The UI only carries the returned state token, exactly like a frame client would.
# - Sidebar shows a human-readable summary of the decoded token.

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

import requests
import streamlit as st

BACKEND_URL = os.getenv("FRAME_BACKEND_URL", "http://127.0.0.1:8000").rstrip("/")


# ----------------------------
# Session helpers
# ----------------------------
def ensure_session() -> None:
    if "frame" not in st.session_state:
        st.session_state["frame"] = None
    if "busy" not in st.session_state:
        st.session_state["busy"] = False
    if "history" not in st.session_state:
        st.session_state["history"] = []


# ----------------------------
# Backend calls
# ----------------------------
def post_action(button_index: Optional[int], state: Optional[str]) -> Dict[str, Any]:
    body: Dict[str, Any] = {"untrustedData": {"fid": 0, "buttonIndex": button_index}}
    if state:
        body["untrustedData"]["state"] = state
    resp = requests.post(f"{BACKEND_URL}/api/frame", json=body, timeout=30)
    resp.raise_for_status()
    return resp.json()


def fetch_image(url: str) -> Optional[bytes]:
    try:
        r = requests.get(url, timeout=30)
        if r.status_code != 200:
            return None
        return r.content
    except requests.RequestException:
        return None


# ----------------------------
# Formatting helpers
# ----------------------------
def decode_token(token: Optional[str]) -> Dict[str, Any]:
    if not token:
        return {}
    try:
        data = json.loads(unquote(token))
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _fmt_ratings(ratings: List[int]) -> str:
    if not ratings:
        return "—"
    avg = sum(ratings) / len(ratings)
    return f"{', '.join(str(r) for r in ratings)} (avg {avg:.1f})"


def _fmt_reactions(reactions: Dict[str, int]) -> str:
    if not reactions:
        return "—"
    icons = {"fire": "🔥", "diamond": "💎", "rocket": "🚀", "thumbsUp": "👍"}
    return "  ".join(f"{icons.get(k, k)} {v}" for k, v in reactions.items())


# ----------------------------
# Sidebar: decoded state summary
# ----------------------------
def render_sidebar() -> None:
    st.sidebar.title("Frame state")

    if st.sidebar.button("↻ Restart", use_container_width=True, disabled=st.session_state["busy"]):
        st.session_state["frame"] = None
        st.session_state["history"] = []
        st.rerun()

    st.sidebar.divider()

    frame = st.session_state.get("frame")
    if not frame:
        st.sidebar.info("Press a button to start the frame.")
        return

    state = decode_token(frame.get("state"))
    st.sidebar.markdown(f"**Step:** `{state.get('step', 'initial')}`")
    st.sidebar.markdown(f"**Wallet:** {state.get('walletAddress') or '—'}")
    show_usd = state.get("showUsdValues")
    st.sidebar.markdown(f"**USD values:** {'shown' if show_usd else 'hidden'}")
    st.sidebar.markdown(f"**Ratings:** {_fmt_ratings(state.get('ratings') or [])}")
    st.sidebar.markdown(f"**Reactions:** {_fmt_reactions(state.get('emojiReactions') or {})}")

    with st.sidebar.expander("Raw token"):
        st.code(frame.get("state") or "", language="text")


# ----------------------------
# Frame
# ----------------------------
def render_frame() -> Optional[int]:
    # Returns the 1-based position of the pressed button, if any.
    frame = st.session_state.get("frame")
    if not frame:
        return 1 if st.button("Connect Wallet", disabled=st.session_state["busy"]) else None

    image = fetch_image(frame["imageUrl"])
    if image is not None:
        st.image(image, use_container_width=True)
    else:
        st.warning(f"Image unavailable: {frame['imageUrl']}")

    buttons = frame.get("buttons") or []
    if not buttons:
        return None

    pressed: Optional[int] = None
    cols = st.columns(len(buttons))
    for i, (col, button) in enumerate(zip(cols, buttons), start=1):
        with col:
            if st.button(button["label"], key=f"frame-button-{i}", use_container_width=True,
                         disabled=st.session_state["busy"]):
                pressed = i
    return pressed


# ----------------------------
# Main
# ----------------------------
def main() -> None:
    st.set_page_config(page_title="RateMyBags Frame", page_icon="💼", layout="centered")

    st.title("💼 RateMyBags Frame preview")
    st.caption(f"Clicking a button posts to {BACKEND_URL}/api/frame, like a Farcaster client would.")

    ensure_session()
    render_sidebar()
    pressed = render_frame()
    if pressed is None:
        return

    frame = st.session_state.get("frame")
    token = frame.get("state") if frame else None

    st.session_state["busy"] = True
    try:
        with st.spinner("Loading next frame..."):
            st.session_state["frame"] = post_action(pressed, token)
        st.session_state["history"].append(pressed)
    except requests.RequestException:
        st.error(f"I couldn't reach the backend. Make sure the API is running on {BACKEND_URL}.")
        return
    finally:
        st.session_state["busy"] = False

    st.rerun()


if __name__ == "__main__":
    main()
