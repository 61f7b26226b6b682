# Role: Local developer CLI to click through the frame without a Farcaster client.
# Drives FrameMachine in-process, carrying the state token between actions the way a client would.

from __future__ import annotations

import backend.config
backend.config.load_env()

from backend.core.frame_machine import FrameMachine
from backend.core.state_codec import decode_state_or_initial
from backend.models.frame import FrameDescriptor
from backend.utils.frame_message import FrameActionPayload, parse_button_index


def _show(descriptor: FrameDescriptor) -> None:
    state = decode_state_or_initial(descriptor.state)
    print(f"\n[{state.step.value}]  image: {descriptor.image_url}")
    for i, button in enumerate(descriptor.buttons, start=1):
        print(f"  {i}) {button.label}")


def main() -> None:
    # 1) Create FrameMachine and show the initial frame
    # 2) Read a button number, post it with the current token
    # 3) Keep the returned token (the client owns the state)
    print("RateMyBags Frame CLI")
    print("Commands: <button number>, /new (restart), /state (show token), /exit")
    print("-" * 50)

    machine = FrameMachine()
    descriptor = machine.initial_frame()
    _show(descriptor)

    while True:
        try:
            user_input = input("\nButton: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_input:
            continue

        cmd = user_input.lower()

        if cmd in {"/exit", "exit", "quit", "/quit"}:
            print("Bye!")
            return

        if cmd in {"/new", "new"}:
            descriptor = machine.initial_frame()
            _show(descriptor)
            continue

        if cmd in {"/state", "state"}:
            print(f"state: {descriptor.state}")
            print(decode_state_or_initial(descriptor.state).model_dump(by_alias=True, exclude_none=True))
            continue

        payload = FrameActionPayload(button_index=parse_button_index(user_input), state=descriptor.state)
        result = machine.handle_action(payload)
        if result.noop:
            print("(no change)")
        descriptor = result.descriptor
        _show(descriptor)


if __name__ == "__main__":
    main()
