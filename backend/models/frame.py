# Role: Small typed contract for what the state machine emits. FrameDescriptor is turned into the JSON response
# and the fc:frame meta-tag document. The validator enforces the protocol's button cap.

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Farcaster frames render at most four buttons.
MAX_BUTTONS = 4


class FrameButton(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    label: str
    # Key line: the logical action this button triggers (not necessarily its position).
    target_index: int = Field(ge=1)


class FrameDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    image_url: str
    buttons: List[FrameButton] = Field(default_factory=list)
    post_url: str
    state: str

    @model_validator(mode="after")
    def _check_buttons(self):
        if len(self.buttons) > MAX_BUTTONS:
            raise ValueError(f"a frame carries at most {MAX_BUTTONS} buttons, got {len(self.buttons)}")
        if any(not b.label for b in self.buttons):
            raise ValueError("button labels must be non-empty")
        return self
