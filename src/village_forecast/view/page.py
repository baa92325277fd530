"""Template rendering of the forecast page."""

import os
from typing import Optional

from fastapi.templating import Jinja2Templates

from village_forecast.weather.models import SearchState

PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
TEMPLATES_DIR = os.path.join(PACKAGE_DIR, "templates")
STATIC_DIR = os.path.join(PACKAGE_DIR, "static")

# Seconds before a loading page reloads itself
LOADING_REFRESH_SECONDS = 1


def format_number(value: Optional[float]) -> str:
    """Format a provider value the way it came in: 0.0 as "0", 12.5 as "12.5".

    Missing values render as an empty cell.
    """
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.filters["number"] = format_number


def render_page(state: SearchState) -> str:
    """Render the whole forecast page for the given state.

    Loading, error and result blocks are independent of each other: a failed
    search keeps showing the previous result under its error message. The
    usage tip appears only while there is no result.
    """
    return templates.get_template("index.html").render(
        state=state,
        refresh_seconds=LOADING_REFRESH_SECONDS,
    )
