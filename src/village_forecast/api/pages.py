"""HTML routes for the forecast page."""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from village_forecast.view.page import render_page
from village_forecast.weather.search import SearchOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["page"])


def get_orchestrator(request: Request) -> SearchOrchestrator:
    """Dependency returning the application's search orchestrator."""
    return request.app.state.orchestrator


@router.get("/", response_class=HTMLResponse)
async def forecast_page(orchestrator: SearchOrchestrator = Depends(get_orchestrator)) -> HTMLResponse:
    """Serve the forecast page for the current search state."""
    return HTMLResponse(render_page(orchestrator.state))


@router.post("/search")
async def submit_search(
    city: str = Form(""),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator)
) -> RedirectResponse:
    """Start a search for the submitted city and go back to the page.

    The search keeps running after the redirect; the page shows it loading
    and reloads until it finishes.

    Args:
        city: Text of the city input
    """
    orchestrator.set_query_text(city)
    if orchestrator.submit(city) is not None:
        logger.info(f"Started search for '{city}'")
    return RedirectResponse(url="/", status_code=303)
