from __future__ import annotations

import asyncio
import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from hnefatafl.board import coord_to_notation, notation_to_coord
from hnefatafl.config import Settings, get_settings
from hnefatafl.engine import (
    GameState,
    attempt_move,
    legal_moves,
    new_game,
    restart,
    serialize_move_result,
    serialize_state,
)

logger = logging.getLogger(__name__)


class MoveRequest(BaseModel):
    origin: str
    target: str


class MatchResponse(BaseModel):
    id: str
    state: Dict


class MoveResponse(BaseModel):
    id: str
    state: Dict
    result: Dict


@dataclass
class Match:
    id: str
    state: GameState
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class Hub:
    def __init__(self) -> None:
        self.connections: Dict[str, Set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def connect(self, match_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self.connections[match_id].add(websocket)

    async def disconnect(self, match_id: str, websocket: WebSocket) -> None:
        async with self._lock:
            self.connections[match_id].discard(websocket)

    async def broadcast(self, match_id: str, payload: Dict) -> None:
        async with self._lock:
            recipients = list(self.connections.get(match_id, set()))
        for ws in recipients:
            try:
                await ws.send_json(payload)
            except WebSocketDisconnect:
                await self.disconnect(match_id, ws)
            except RuntimeError:
                # Socket already closed underneath us.
                logger.debug("Dropping closed websocket for match %s", match_id)
                await self.disconnect(match_id, ws)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Hnefatafl API")
    hub = Hub()
    matches: Dict[str, Match] = {}
    app.state.hub = hub

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def serialize_match(match: Match) -> Dict:
        return {"id": match.id, "state": serialize_state(match.state)}

    def require_match(match_id: str) -> Match:
        match = matches.get(match_id)
        if match is None:
            raise HTTPException(status_code=404, detail="Match not found")
        return match

    def parse_coord(token: str):
        try:
            return notation_to_coord(token)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/match", response_model=MatchResponse)
    async def create_match() -> MatchResponse:
        match_id = uuid.uuid4().hex[:8]
        match = Match(id=match_id, state=new_game())
        matches[match_id] = match
        logger.info("Created match %s", match_id)
        return MatchResponse(**serialize_match(match))

    @app.get("/match/{match_id}", response_model=MatchResponse)
    async def get_match(match_id: str) -> MatchResponse:
        match = require_match(match_id)
        return MatchResponse(**serialize_match(match))

    @app.get("/match/{match_id}/legal")
    async def get_legal(match_id: str, origin: Optional[str] = None) -> Dict:
        match = require_match(match_id)
        source = parse_coord(origin) if origin is not None else None
        moves: List[Dict[str, str]] = [
            {"origin": coord_to_notation(move.origin), "target": coord_to_notation(move.target)}
            for move in legal_moves(match.state, source)
        ]
        moves.sort(key=lambda item: (item["origin"], item["target"]))
        return {
            "id": match.id,
            "side_to_move": match.state.side_to_move.value,
            "origin": origin.upper() if origin else None,
            "moves": moves,
        }

    @app.post("/match/{match_id}/move", response_model=MoveResponse)
    async def play_move(match_id: str, body: MoveRequest) -> MoveResponse:
        match = require_match(match_id)
        origin = parse_coord(body.origin)
        target = parse_coord(body.target)
        async with match.lock:
            match.state, result = attempt_move(match.state, origin, target)
        if not result.accepted:
            raise HTTPException(
                status_code=400,
                detail={"reason": result.reason.value, "message": result.message},
            )
        payload = serialize_match(match)
        asyncio.create_task(hub.broadcast(match_id, payload))
        return MoveResponse(**payload, result=serialize_move_result(result))

    @app.post("/match/{match_id}/restart", response_model=MatchResponse)
    async def restart_match(match_id: str) -> MatchResponse:
        match = require_match(match_id)
        async with match.lock:
            match.state = restart()
        logger.info("Restarted match %s", match_id)
        payload = serialize_match(match)
        asyncio.create_task(hub.broadcast(match_id, payload))
        return MatchResponse(**payload)

    @app.websocket("/ws/match/{match_id}")
    async def ws_match(websocket: WebSocket, match_id: str) -> None:
        await hub.connect(match_id, websocket)
        try:
            match = matches.get(match_id)
            if match:
                await websocket.send_json(serialize_match(match))
            while True:
                # Keep connection open; inbound messages are ignored.
                await websocket.receive_text()
        except WebSocketDisconnect:
            await hub.disconnect(match_id, websocket)
        except Exception:
            logger.exception("Websocket for match %s failed", match_id)
            await hub.disconnect(match_id, websocket)

    return app
