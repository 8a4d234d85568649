"""
Feed Router - the calendar subscription endpoint.

Endpoints:
==========
- GET /todo-due.ics?token=<secret> → text/calendar feed of due To Do tasks

Security:
=========
When ICS_TOKEN is set, the token query parameter must match it exactly
(constant-time compare); otherwise the request gets 401 before any upstream
call is made. When ICS_TOKEN is empty the feed is open to anyone who knows the URL.

Failures (auth, upstream, anything else) are logged here and reported as a
plain 500 so callers cannot tell a credential problem from a Graph outage.
"""

import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse, Response

from todo_ics.core.config import Settings
from todo_ics.deps import get_feed_service, get_settings
from todo_ics.services.feed_service import FeedService


logger = logging.getLogger("todo_ics.routers.feed")


CALENDAR_MEDIA_TYPE = "text/calendar; charset=utf-8"
CACHE_CONTROL = "public, max-age=120"


router = APIRouter(tags=["feed"])


@router.get("/todo-due.ics")
async def get_todo_feed(
    token: Optional[str] = Query(None, description="Shared secret (required when ICS_TOKEN is set)"),
    config: Settings = Depends(get_settings),
    feed_service: FeedService = Depends(get_feed_service),
):
    """
    Serve due, unfinished To Do tasks as an all-day event calendar.

    Returns:
        200 with the calendar, 401 on a bad or missing token, 500 on any
        pipeline failure
    """
    if config.ICS_TOKEN and not hmac.compare_digest(
        (token or "").encode("utf-8"), config.ICS_TOKEN.encode("utf-8")
    ):
        logger.warning("Rejected feed request with missing or wrong token")
        return PlainTextResponse("Unauthorized", status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        body = await feed_service.render_feed()
    except Exception:
        logger.exception("Calendar feed generation failed")
        return PlainTextResponse(
            "Calendar feed error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response(
        content=body,
        media_type=CALENDAR_MEDIA_TYPE,
        headers={"Cache-Control": CACHE_CONTROL},
    )
