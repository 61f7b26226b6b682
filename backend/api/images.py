# Role: Image endpoints referenced from frame descriptors. Each one redraws its card from the query string alone
# (address/showUsd or the state token), so no session store is ever needed.

import traceback
from typing import Callable, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse, Response

import backend.config as config
from backend.api.deps import image_renderer
from backend.core.state_codec import decode_state_or_initial
from backend.tools.image_renderer import STEP_CARDS
from backend.tools.portfolio_client import get_portfolio_or_mock

router = APIRouter(tags=["images"])


def _png(render: Callable[[], bytes], max_age: int) -> Response:
    try:
        content = render()
    except Exception:
        print("Error generating frame image:")
        traceback.print_exc()
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})
    return Response(
        content=content,
        media_type="image/png",
        headers={"Cache-Control": f"max-age={max_age}"},
    )


@router.get("/api/og")
def og_image() -> Response:
    return _png(image_renderer.render_og, max_age=60)


@router.get("/api/portfolio")
def portfolio_image(address: Optional[str] = None, showUsd: Optional[str] = None) -> Response:
    wallet = address or config.DEMO_WALLET_ADDRESS
    show_usd = showUsd == "true"
    return _png(lambda: image_renderer.render_portfolio(get_portfolio_or_mock(wallet), show_usd), max_age=10)


@router.get("/api/results")
def results_image(state: Optional[str] = None) -> Response:
    return _png(lambda: image_renderer.render_results(decode_state_or_initial(state)), max_age=10)


@router.get("/api/share")
def share_image(state: Optional[str] = None) -> Response:
    return _png(lambda: image_renderer.render_share(decode_state_or_initial(state)), max_age=60)


@router.get("/images/{name}.png")
def step_image(name: str) -> Response:
    if name not in STEP_CARDS:
        raise HTTPException(status_code=404, detail="Unknown image")
    return _png(lambda: image_renderer.render_step_card(name), max_age=300)
