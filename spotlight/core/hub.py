"""
Synchronization Hub
Relays client intents into the presentation store and mirrors the result
to every connected display
"""
import asyncio
import json
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from spotlight.core.intents import (
    Intent, IndexOnly, IndexWithCandidates, SetIdle, SetCategory,
    STATE_UPDATE, decode_message
)
from spotlight.models import PresentationState
from spotlight.state import PresentationStore


logger = logging.getLogger(__name__)

MAX_PENDING = 256  # queued snapshots per client before it is dropped


def state_message(state: PresentationState) -> Dict[str, Any]:
    """Wire shape of a snapshot"""
    return {"event": STATE_UPDATE, "data": state.model_dump()}


@dataclass
class _Connection:
    websocket: Any
    outbox: asyncio.Queue
    writer: Optional[asyncio.Task] = None


class SyncHub:
    """
    Broadcast hub over a PresentationStore

    Every connection gets a snapshot when it opens. Every accepted intent
    is applied to the store and the resulting state is queued for all
    connections, the sender included. Malformed intents are dropped with
    no reply.

    Applying an intent and queueing its snapshot never awaits, so one
    dispatch turn cannot interleave with another and every client sees
    the same sequence of states. Each connection has its own writer task
    draining its outbox: a client that stops reading only delays itself,
    and is dropped once max_pending snapshots pile up.
    """

    def __init__(self, store: PresentationStore, max_pending: int = MAX_PENDING):
        self.store = store
        self.max_pending = max_pending
        self.active_connections: Dict[str, _Connection] = {}

    @property
    def connection_count(self) -> int:
        return len(self.active_connections)

    async def connect(self, websocket: Any) -> str:
        """Accept a websocket and catch it up with the current state"""
        await websocket.accept()
        client_id = uuid.uuid4().hex[:8]
        conn = _Connection(websocket=websocket, outbox=asyncio.Queue(maxsize=self.max_pending))
        self.active_connections[client_id] = conn
        conn.writer = asyncio.create_task(self._writer(client_id, conn))
        logger.info(f"🔌 Client {client_id} connected. Total: {self.connection_count}")
        self._enqueue(client_id, conn, self._encode(self.store.snapshot()))
        return client_id

    def disconnect(self, client_id: str) -> None:
        conn = self.active_connections.pop(client_id, None)
        if conn is None:
            return
        if conn.writer is not None and conn.writer is not asyncio.current_task():
            conn.writer.cancel()
        # Release anything still queued so drain() never waits on a dead client
        while not conn.outbox.empty():
            conn.outbox.get_nowait()
            conn.outbox.task_done()
        logger.info(f"👋 Client {client_id} disconnected. Total: {self.connection_count}")

    async def close(self) -> None:
        """Drop every connection (server shutdown)"""
        for client_id in list(self.active_connections):
            self.disconnect(client_id)

    async def handle_message(self, client_id: str, raw: Union[str, bytes]) -> bool:
        """
        Handle one inbound frame

        Returns:
            True if the intent was applied and broadcast, False if dropped
        """
        intent = decode_message(raw)
        if intent is None:
            logger.warning(f"⚠️ Dropped malformed intent from {client_id}: {str(raw)[:200]}")
            return False
        logger.info(f"📥 {type(intent).__name__} from {client_id}")
        await self.dispatch(intent)
        return True

    async def dispatch(self, intent: Intent) -> PresentationState:
        """Apply an intent to the store and broadcast the new state"""
        state = self._apply(intent)
        message = self._encode(state)
        for client_id, conn in list(self.active_connections.items()):
            self._enqueue(client_id, conn, message)
        return state

    async def drain(self, *client_ids: str) -> None:
        """Wait until the given clients (default: all) have been sent everything queued"""
        await asyncio.gather(*(
            conn.outbox.join()
            for client_id, conn in list(self.active_connections.items())
            if not client_ids or client_id in client_ids
        ))

    def _apply(self, intent: Intent) -> PresentationState:
        if isinstance(intent, IndexOnly):
            return self.store.set_index(intent.index)
        if isinstance(intent, IndexWithCandidates):
            return self.store.set_index(intent.index, intent.candidates)
        if isinstance(intent, SetIdle):
            return self.store.set_idle(intent.idle)
        if isinstance(intent, SetCategory):
            return self.store.set_category(intent.category, intent.candidates)
        raise TypeError(f"Unknown intent: {intent!r}")

    @staticmethod
    def _encode(state: PresentationState) -> str:
        return json.dumps(state_message(state))

    def _enqueue(self, client_id: str, conn: _Connection, message: str) -> None:
        try:
            conn.outbox.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning(f"🐢 Client {client_id} is not reading, dropping it")
            self.disconnect(client_id)

    async def _writer(self, client_id: str, conn: _Connection) -> None:
        """Fire-and-forget sends for one client; a failed send drops it"""
        while True:
            message = await conn.outbox.get()
            try:
                await conn.websocket.send_text(message)
            except Exception as e:
                logger.error(f"❌ Failed to send to {client_id}: {e}")
                self.disconnect(client_id)
                return
            finally:
                conn.outbox.task_done()
