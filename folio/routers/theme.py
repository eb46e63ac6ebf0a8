"""Theme preference endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from folio.services.theme import THEME_COOKIE, Theme, current_theme

router = APIRouter(prefix="/theme", tags=["theme"])

_ONE_YEAR = 60 * 60 * 24 * 365


@router.get("")
async def get_theme(theme: Theme = Depends(current_theme)):
    """Get the reader's current theme."""
    return {"theme": theme.value}


@router.post("/toggle")
async def toggle_theme(theme: Theme = Depends(current_theme)):
    """Switch between light and dark and remember the choice."""
    new_theme = theme.toggled()
    response = JSONResponse(content={"theme": new_theme.value})
    response.set_cookie(
        THEME_COOKIE, new_theme.value, max_age=_ONE_YEAR, samesite="lax"
    )
    return response
