# Role: Thin HTTP adapter for frame actions. Parses the POST body and delegates the whole action to FrameMachine
# (business logic lives in core, not in the API layer). This is the only place unexpected errors become a 500.

import traceback

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse

from backend.api.deps import frame_machine
from backend.utils.frame_html import render_frame_html
from backend.utils.frame_message import parse_frame_payload

router = APIRouter(tags=["frame"])

_SERVER_ERROR = {"error": "Internal Server Error"}


@router.post("/api/frame")
async def frame_action(request: Request) -> JSONResponse:
    # 1) Parse body (unparseable or non-object bodies count as "no action")
    # 2) Run one state-machine step
    # 3) Return descriptor fields + the meta-tag document
    try:
        try:
            body = await request.json()
        except ValueError:
            body = None
        result = frame_machine.handle_action(parse_frame_payload(body))
        content = result.descriptor.model_dump(by_alias=True)
        content["frameHtml"] = render_frame_html(result.descriptor)
        return JSONResponse(content=content)
    except Exception:
        # Key line: never leak internals to the caller; keep the details in server logs.
        print("Error in frame route:")
        traceback.print_exc()
        return JSONResponse(status_code=500, content=_SERVER_ERROR)


@router.get("/", response_class=HTMLResponse)
def landing_page() -> HTMLResponse:
    # Role: entry point clients scrape; carries the initial frame + OpenGraph preview.
    descriptor = frame_machine.initial_frame()
    return HTMLResponse(render_frame_html(descriptor, og_image=descriptor.image_url))
