# Role: Normalize the inbound frame POST body. Accepts both the flat shape ({buttonIndex, state}) and the
# Farcaster shape ({untrustedData: {buttonIndex, state, fid, ...}}). Nothing here is verified: untrustedData is
# exactly that, and is only used to pick the pressed button, the token, and a user label for debug logs.

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

# ASCII digits only (str.isdigit() also accepts "²", which int() rejects). No button position needs
# more than a few digits, so longer strings never reach int().
_BUTTON_INDEX_RE = re.compile(r"-?[0-9]{1,9}")


@dataclass(frozen=True)
class FrameUser:
    fid: int = 0
    username: Optional[str] = None
    display_name: Optional[str] = None


@dataclass(frozen=True)
class FrameActionPayload:
    button_index: Optional[int] = None
    state: Optional[str] = None
    user: FrameUser = FrameUser()


def parse_button_index(value: Any) -> Optional[int]:
    # Key line: bool is an int subclass; True must not mean "button 1".
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _BUTTON_INDEX_RE.fullmatch(value.strip()):
        return int(value.strip())
    return None


def extract_user(untrusted: Dict[str, Any]) -> FrameUser:
    fid = untrusted.get("fid")
    return FrameUser(
        fid=fid if isinstance(fid, int) and not isinstance(fid, bool) else 0,
        username=untrusted.get("username") if isinstance(untrusted.get("username"), str) else None,
        display_name=untrusted.get("displayName") if isinstance(untrusted.get("displayName"), str) else None,
    )


def parse_frame_payload(body: Any) -> FrameActionPayload:
    # 1) Non-object bodies -> empty payload ("no action" on the initial state)
    # 2) Top-level fields win; fall back to untrustedData
    if not isinstance(body, dict):
        return FrameActionPayload()

    untrusted = body.get("untrustedData")
    if not isinstance(untrusted, dict):
        untrusted = {}

    raw_button = body.get("buttonIndex", untrusted.get("buttonIndex"))
    raw_state = body.get("state", untrusted.get("state"))

    return FrameActionPayload(
        button_index=parse_button_index(raw_button),
        state=raw_state if isinstance(raw_state, str) and raw_state else None,
        user=extract_user(untrusted),
    )
