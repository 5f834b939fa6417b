# FastAPI front end for the prompt tag editor
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import uuid
from typing import Any, Dict, List, Optional
from pydantic import BaseModel

from prompt_sync.config_loader import CONFIG
from prompt_sync.models import Tag
from prompt_sync.prompt_constants import UnknownPresetError, load_prompt_constants
from prompt_sync.session import PromptSession
from prompt_sync.tag_catalog import TagCatalog


def get_log_level(server_config: Dict[str, Any]) -> str:
    """Level name for logging.basicConfig; config values may be lowercase."""
    return str(server_config.get("log_level", "INFO")).upper()


logging.basicConfig(
    level=get_log_level(CONFIG["server"]),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=CONFIG["server"].get("cors_origins", ["*"]),
    allow_methods=["*"],
    allow_headers=["*"],
)

PROMPT_CONSTANTS = load_prompt_constants(CONFIG)

# Shared, read-only between replacements; sessions keep the catalog they were created with
catalog = TagCatalog()


class EditorSession:
    """A PromptSession plus the notifications raised since the last response."""

    def __init__(self, catalog: TagCatalog, selection: List[Tag]):
        self.notifications: List[Dict[str, str]] = []
        self.prompt = PromptSession(
            catalog=catalog,
            constants=PROMPT_CONSTANTS,
            selection=selection,
            notifier=self._notify,
        )

    def _notify(self, level: str, message: str):
        self.notifications.append({"level": level, "message": message})

    def response(self, **extra) -> Dict[str, Any]:
        result = self.prompt.snapshot()
        result["notifications"] = self.notifications
        self.notifications = []
        result.update(extra)
        return result


sessions: Dict[str, EditorSession] = {}


# Models
class CatalogRequest(BaseModel):
    tags: List[Tag] = []

class SessionCreateRequest(BaseModel):
    selection: List[Tag] = []
    catalog: Optional[List[Tag]] = None  # Overrides the shared catalog for this session

class TagsRequest(BaseModel):
    tags: List[Tag] = []

class TextRequest(BaseModel):
    text: str = ""


def session_not_found(session_id: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": f"Session not found: {session_id}"})


@app.get("/api/constants")
async def get_constants():
    return PROMPT_CONSTANTS.model_dump()


@app.get("/api/catalog")
async def get_catalog():
    return {"tags": catalog.to_records(), "count": len(catalog)}


@app.put("/api/catalog")
async def replace_catalog(request: CatalogRequest):
    """Replace the shared catalog used by sessions created afterwards."""
    global catalog
    catalog = TagCatalog(request.tags)
    logger.info(f"Catalog replaced: {len(catalog)} tags")
    return {"success": True, "count": len(catalog)}


@app.post("/api/sessions")
async def create_session(request: SessionCreateRequest):
    session_catalog = catalog if request.catalog is None else TagCatalog(request.catalog)
    session_id = uuid.uuid4().hex
    sessions[session_id] = EditorSession(session_catalog, request.selection)
    logger.debug(f"Session created: {session_id}")
    return sessions[session_id].response(session_id=session_id)


@app.get("/api/sessions/{session_id}")
async def get_session(session_id: str):
    session = sessions.get(session_id)
    if session is None:
        return session_not_found(session_id)
    return session.response()


@app.delete("/api/sessions/{session_id}")
async def delete_session(session_id: str):
    if sessions.pop(session_id, None) is None:
        return session_not_found(session_id)
    return {"success": True}


@app.put("/api/sessions/{session_id}/tags")
async def set_session_tags(session_id: str, request: TagsRequest):
    session = sessions.get(session_id)
    if session is None:
        return session_not_found(session_id)
    session.prompt.set_from_tags(request.tags)
    return session.response()


@app.post("/api/sessions/{session_id}/text")
async def text_changed(session_id: str, request: TextRequest):
    session = sessions.get(session_id)
    if session is None:
        return session_not_found(session_id)
    session.prompt.set_from_text(request.text)
    return session.response()


@app.post("/api/sessions/{session_id}/blur")
async def text_blurred(session_id: str):
    session = sessions.get(session_id)
    if session is None:
        return session_not_found(session_id)
    session.prompt.commit()
    return session.response()


@app.post("/api/sessions/{session_id}/insert/{preset_key}")
async def insert_preset(session_id: str, preset_key: str):
    session = sessions.get(session_id)
    if session is None:
        return session_not_found(session_id)
    try:
        session.prompt.insert_preset(preset_key)
    except UnknownPresetError:
        return JSONResponse(status_code=404, content={"error": f"Unknown preset: {preset_key}"})
    return session.response()


@app.post("/api/sessions/{session_id}/clear")
async def clear_session(session_id: str):
    session = sessions.get(session_id)
    if session is None:
        return session_not_found(session_id)
    session.prompt.clear()
    return session.response()


@app.post("/api/sessions/{session_id}/copy")
async def copy_prompt(session_id: str):
    """Return the prompt text; the browser performs the clipboard write."""
    session = sessions.get(session_id)
    if session is None:
        return session_not_found(session_id)
    text = session.prompt.copy()
    return session.response(clipboard=text)


@app.post("/api/sessions/{session_id}/copy-negative")
async def copy_negative_prompt(session_id: str):
    session = sessions.get(session_id)
    if session is None:
        return session_not_found(session_id)
    text = session.prompt.copy_negative()
    return session.response(clipboard=text)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=CONFIG["server"]["host"], port=CONFIG["server"]["port"])
