"""
Live queue panel API routes.

``GET /live/{status}`` returns the panel once; the websocket keeps a
projector running for the connection and pushes every panel it publishes.
"""

import asyncio
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status

from ..database import DocumentStore
from ..models.queue import LivePanel, VisitStatus
from ..models.user import AdminProfile
from ..services.auth_service import AuthService
from ..services.live_service import LiveStatusProjector
from .dependencies import get_current_admin, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/live", tags=["Live"])


@router.get("/{visit_status}", response_model=LivePanel, response_model_by_alias=False)
async def live_panel(
    visit_status: VisitStatus,
    desk: Optional[str] = Query(None),
    service: Optional[str] = Query(None),
    current_admin: AdminProfile = Depends(get_current_admin),
    store: DocumentStore = Depends(get_store)
):
    """Every visit currently in ``visit_status`` with elapsed minutes."""
    projector = LiveStatusProjector(store, visit_status, desk=desk, service=service)
    return await projector.refresh()


@router.websocket("/{visit_status}/ws")
async def live_panel_feed(
    websocket: WebSocket,
    visit_status: VisitStatus,
    token: str = Query(...),
    desk: Optional[str] = Query(None),
    service: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store)
):
    """Push the panel on every change and every tick until the client leaves."""
    admin = await AuthService(store).get_current_admin(token)
    if not admin:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    panels: asyncio.Queue = asyncio.Queue()
    projector = LiveStatusProjector(store, visit_status, desk=desk, service=service)
    projector.subscribe(panels.put_nowait)

    async def send_panels():
        while True:
            panel = await panels.get()
            await websocket.send_json(panel.model_dump(mode="json"))

    sender = asyncio.create_task(send_panels())
    await projector.start()
    logger.info("Live feed opened for %s (%s)", visit_status.value, admin.email)
    try:
        while True:
            # Client messages are ignored; this only waits for the disconnect
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Live feed closed for %s (%s)", visit_status.value, admin.email)
    finally:
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
        await projector.stop()
