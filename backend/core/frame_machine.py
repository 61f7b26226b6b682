# backend/core/frame_machine.py
# Role: Orchestrator for one frame action. It glues together:
# state decoding (with self-healing fallback), action resolution, the transition table, and descriptor building.
# Holds no per-session data: every request is reproducible from its payload alone.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import backend.config as config
from backend.core.descriptor_builder import FrameDescriptorBuilder
from backend.core.state_codec import StateDecodeError, UnknownStepError, decode_state, encode_state
from backend.core.transitions import transition
from backend.models.frame import FrameDescriptor
from backend.models.state import FrameState, initial_state
from backend.models.step import Step
from backend.utils.frame_message import FrameActionPayload


@dataclass(frozen=True)
class FrameResult:
    descriptor: FrameDescriptor
    state: FrameState
    previous_step: Step
    noop: bool = False
    # True when the incoming token was unusable and the session restarted.
    recovered: bool = False


class FrameMachine:
    def __init__(
        self,
        builder: Optional[FrameDescriptorBuilder] = None,
        wallet_address: Optional[str] = None,
    ) -> None:
        # Key line: dependencies are injectable for testing.
        self.builder = builder or FrameDescriptorBuilder()
        self.wallet_address = wallet_address or config.DEMO_WALLET_ADDRESS

    def initial_frame(self) -> FrameDescriptor:
        state = initial_state()
        return self.builder.build(state, encode_state(state))

    def handle_action(self, payload: FrameActionPayload) -> FrameResult:
        # 1) Decode state (unknown step -> reset + re-display initial; malformed -> initial, keep going)
        # 2) Pressed position -> logical action for the current layout
        # 3) Transition (NoOp re-displays the same step)
        # 4) Encode + build descriptor

        recovered = False
        try:
            state = decode_state(payload.state) if payload.state else initial_state()
        except UnknownStepError as e:
            if config.DEBUG:
                print("FRAME: unknown step in token, restarting:", e)
            state = initial_state()
            return self._result(state, previous_step=Step.INITIAL, noop=True, recovered=True)
        except StateDecodeError as e:
            if config.DEBUG:
                print("FRAME: bad state token, using initial state:", e)
            state = initial_state()
            recovered = True

        action = self.builder.resolve_action(state, payload.button_index)
        outcome = transition(state, action, wallet_address=self.wallet_address)

        if config.DEBUG:
            print("\n--- FRAME DEBUG ---")
            print("USER fid:", payload.user.fid, "username:", payload.user.username)
            print("BUTTON INDEX (raw):", payload.button_index)
            print("ACTION (resolved):", action)
            print("STEP:", state.step.value, "->", outcome.step.value)
            print("NOOP:", outcome.noop)
            print("RECOVERED:", recovered)
            print("STATE:", outcome.state.model_dump(by_alias=True, exclude_none=True))
            print("-------------------\n")

        return self._result(outcome.state, previous_step=state.step, noop=outcome.noop, recovered=recovered)

    def _result(self, state: FrameState, *, previous_step: Step, noop: bool, recovered: bool) -> FrameResult:
        token = encode_state(state)
        return FrameResult(
            descriptor=self.builder.build(state, token),
            state=state,
            previous_step=previous_step,
            noop=noop,
            recovered=recovered,
        )
