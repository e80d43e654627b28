"""
Scripted chat relay for the dashboard's help widget.

Each user message is echoed straight back and answered after a short delay
with a canned reply picked by keyword. There is no model behind it.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Set

from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect

from .schemas import ChatStatusOut

logger = logging.getLogger(__name__)

router = APIRouter()

# first match wins, so narrower keywords come first ("kiracı" before "kira")
CANNED_REPLIES = (
    (("kiracı", "tenant"),
     "Kiracı bilgilerini Kiracılar sayfasından görüntüleyebilir, yeni kiracı ekleyebilir "
     "veya mevcut kayıtları güncelleyebilirsiniz."),
    (("ev sahibi", "landlord"),
     "Ev sahiplerini Ev Sahipleri sayfasında yönetebilirsiniz. Her mülk bir ev sahibine bağlıdır."),
    (("gecik", "overdue", "late"),
     "Vadesi geçmiş ödemeler Ödemeler sayfasında ayrıca listelenir. "
     "Kiracıya hatırlatma göndermenizi öneririm."),
    (("ödeme", "payment"),
     "Bekleyen ve gecikmiş ödemeleri Ödemeler sayfasından takip edebilir, "
     "ödeme alındığında durumunu 'ödendi' olarak güncelleyebilirsiniz."),
    (("sözleşme", "contract"),
     "Sözleşmeler sayfasından aktif ve geçmiş sözleşmeleri inceleyebilirsiniz. "
     "Aktif bir sözleşme, mülkü otomatik olarak dolu olarak işaretler."),
    (("kira", "rent"),
     "Aylık kira tutarları mülk ve sözleşme kayıtlarında tutulur. Kontrol panelindeki "
     "aylık gelir, aktif sözleşmelerin kira toplamıdır."),
    (("mülk", "daire", "property"),
     "Mülkler sayfasında tüm mülkleri, boş veya dolu durumlarını ve ev sahiplerini görebilirsiniz."),
    (("merhaba", "selam", "hello"),
     "Merhaba! KiraTakip asistanıyım. Size nasıl yardımcı olabilirim?"),
    (("yardım", "help"),
     "Kiracılar, ev sahipleri, mülkler, sözleşmeler ve ödemeler hakkında soru sorabilirsiniz."),
)
DEFAULT_REPLY = (
    "Sorunuzu aldım. Daha ayrıntılı yardım için destek talebi oluşturabilirsiniz."
)
SUPPORT_ACK = (
    "Destek talebiniz alındı. Ekibimiz en kısa sürede sizinle iletişime geçecek."
)


def canned_reply(message: str) -> str:
    text = message.lower()
    for keywords, reply in CANNED_REPLIES:
        if any(k in text for k in keywords):
            return reply
    return DEFAULT_REPLY


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ChatRelay:
    """Registry of open chat sockets plus the reply logic."""

    def __init__(self, response_delay: float = 1.0):
        self.response_delay = response_delay
        self.connections: Set[WebSocket] = set()
        self._replies: Set[asyncio.Task] = set()

    @property
    def active_connections(self) -> int:
        return len(self.connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.connections.add(websocket)
        logger.info("Chat client connected (total: %d)", self.active_connections)

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket not in self.connections:
            return
        self.connections.remove(websocket)
        logger.info("Chat client disconnected (total: %d)", self.active_connections)

    async def handle(self, websocket: WebSocket, data: dict) -> None:
        msg_type = data.get("type")
        if msg_type == "user_message":
            await websocket.send_json(data)
            task = asyncio.create_task(self._reply_later(websocket, str(data.get("message", ""))))
            self._replies.add(task)
            task.add_done_callback(self._replies.discard)
        elif msg_type == "support_request":
            await websocket.send_json({
                "type": "support_message",
                "message": SUPPORT_ACK,
                "timestamp": _timestamp(),
            })
        else:
            logger.warning("Ignoring chat frame of type %r", msg_type)

    async def _reply_later(self, websocket: WebSocket, message: str) -> None:
        await asyncio.sleep(self.response_delay)
        if websocket not in self.connections:
            return
        try:
            await websocket.send_json({
                "type": "ai_message",
                "message": canned_reply(message),
                "timestamp": _timestamp(),
            })
        except (WebSocketDisconnect, RuntimeError, OSError):
            logger.debug("Chat client went away before the reply was sent")
            self.disconnect(websocket)


@router.websocket("/ws")
async def chat_websocket(websocket: WebSocket):
    relay: ChatRelay = websocket.app.state.chat
    await relay.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                logger.warning("Dropping binary chat frame")
                continue
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Dropping malformed chat frame")
                continue
            if not isinstance(data, dict):
                logger.warning("Dropping chat frame that is not an object")
                continue
            await relay.handle(websocket, data)
    except WebSocketDisconnect:
        pass
    finally:
        relay.disconnect(websocket)


@router.get("/api/chat/status", response_model=ChatStatusOut, tags=["Chat"])
async def chat_status(request: Request):
    relay: ChatRelay = request.app.state.chat
    return ChatStatusOut(active_connections=relay.active_connections, status="online")
