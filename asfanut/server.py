"""
REST API サーバー（remote ストレージモード用）。
GET/POST /api/profile, GET/POST /api/items, GET/DELETE /api/items/{id}
"""
from __future__ import annotations

import sqlite3
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from asfanut.schemas import HealthResult, ItemPayload, ProfilePayload, SaveResult
from asfanut.store import db, repo
from asfanut.util.log import get_logger, log_item_event

LOG = get_logger("asfanut-server")


def create_app(db_path: Optional[str] = None) -> FastAPI:
    """SQLite を背後に持つ REST API を作成。"""
    resolved_db_path = db_path or db._default_db_path()
    conn = db.get_connection(resolved_db_path)
    try:
        db.init_schema(conn)
    finally:
        conn.close()
    LOG.info("Connected to the SQLite database at %s", resolved_db_path)

    app = FastAPI(title="Asfanut Store API")
    app.state.db_path = resolved_db_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(sqlite3.Error)
    async def _sqlite_error(_: Request, exc: sqlite3.Error) -> JSONResponse:
        LOG.error("database error: %s", exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    def _open() -> sqlite3.Connection:
        return db.get_connection(app.state.db_path)

    @app.get("/api/health", response_model=HealthResult)
    def health() -> dict[str, Any]:
        conn = _open()
        try:
            rows = conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
            ).fetchall()
        finally:
            conn.close()
        return {"status": "ok", "db_path": app.state.db_path, "tables": [r["name"] for r in rows]}

    @app.get("/api/profile")
    def get_profile() -> Optional[dict[str, Any]]:
        conn = _open()
        try:
            return repo.get_profile_data(conn)
        finally:
            conn.close()

    @app.post("/api/profile", response_model=SaveResult)
    def save_profile(profile: ProfilePayload) -> dict[str, Any]:
        conn = _open()
        try:
            repo.save_profile_data(conn, profile.model_dump(exclude_unset=True))
        finally:
            conn.close()
        return {"message": "Profile saved successfully"}

    @app.get("/api/items")
    def list_items() -> list[dict[str, Any]]:
        conn = _open()
        try:
            return repo.list_items_data(conn)
        finally:
            conn.close()

    @app.post("/api/items", response_model=SaveResult)
    def save_item(item: ItemPayload) -> dict[str, Any]:
        payload = item.model_dump(exclude_unset=True)
        conn = _open()
        try:
            item_id = repo.upsert_item_data(conn, payload)
        finally:
            conn.close()
        log_item_event(LOG, "save", item_id, status=payload.get("status"), price=payload.get("userPrice"))
        return {"message": "Item saved successfully", "id": item_id}

    @app.get("/api/items/{item_id}")
    def get_item(item_id: str) -> dict[str, Any]:
        conn = _open()
        try:
            item = repo.get_item_data(conn, item_id)
        finally:
            conn.close()
        if item is None:
            raise HTTPException(status_code=404, detail="Item not found")
        return item

    @app.delete("/api/items/{item_id}", response_model=SaveResult)
    def delete_item(item_id: str) -> dict[str, Any]:
        conn = _open()
        try:
            existed = repo.delete_item(conn, item_id)
        finally:
            conn.close()
        if existed:
            log_item_event(LOG, "delete", item_id)
        return {"message": "Item deleted successfully", "id": item_id}

    return app
