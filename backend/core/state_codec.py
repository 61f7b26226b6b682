# Role: State token codec. FrameState <-> URL-safe string (percent-encoded compact JSON, camelCase keys).
# The token is the only place session state lives, so decoding must be lossless and must never crash the loop:
# callers either catch StateDecodeError or use decode_state_or_initial().

from __future__ import annotations

import json
from typing import Optional
from urllib.parse import quote, unquote

from pydantic import ValidationError

import backend.config as config
from backend.models.state import FrameState, initial_state
from backend.models.step import Step

_KNOWN_STEPS = {s.value for s in Step}

# A real token is a few hundred characters; anything this large did not come from encode_state().
MAX_TOKEN_LENGTH = 8192


class StateDecodeError(ValueError):
    """Raised when a state token cannot be turned back into a FrameState."""


class UnknownStepError(StateDecodeError):
    """The token is well-formed but names a step this machine does not know."""


def encode_state(state: FrameState) -> str:
    # Key line: None fields are dropped so "absent" stays absent after a round-trip.
    payload = state.model_dump_json(by_alias=True, exclude_none=True)
    return quote(payload, safe="")


def decode_state(token: Optional[str]) -> FrameState:
    # 1) Reverse the percent-encoding and parse JSON
    # 2) Check the step name separately (unknown step is a recovery case, not a parse error)
    # 3) Validate the full structure
    if not token or not token.strip():
        raise StateDecodeError("Empty state token")
    if len(token) > MAX_TOKEN_LENGTH:
        raise StateDecodeError(f"State token too long ({len(token)} chars)")

    try:
        data = json.loads(unquote(token))
    except (ValueError, RecursionError) as e:
        # Key line: deeply nested arrays/objects blow the parser's stack instead of raising ValueError.
        raise StateDecodeError(f"State token is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise StateDecodeError(f"State token must encode an object, got {type(data).__name__}")

    step = data.get("step")
    if not isinstance(step, str) or step not in _KNOWN_STEPS:
        raise UnknownStepError(f"Unknown step: {step!r}")

    try:
        return FrameState.model_validate(data)
    except ValidationError as e:
        raise StateDecodeError(f"Invalid state structure: {e.error_count()} error(s)") from e


def decode_state_or_initial(token: Optional[str]) -> FrameState:
    # Role: self-healing decode. A corrupted or foreign token restarts the session instead of erroring out.
    try:
        return decode_state(token)
    except StateDecodeError as e:
        if config.DEBUG and token:
            print("STATE_CODEC: falling back to initial state:", e)
        return initial_state()
