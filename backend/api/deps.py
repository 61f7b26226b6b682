# Role: Shared singletons for the API layer. Both are stateless (no per-session data),
# so one instance per process is safe to share across concurrent requests.

from backend.core.frame_machine import FrameMachine
from backend.tools.image_renderer import ImageRenderer

frame_machine = FrameMachine()
image_renderer = ImageRenderer()
