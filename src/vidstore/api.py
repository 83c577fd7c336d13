"""FastAPI HTTP layer — thin wrapper exposing VidStoreService as REST routes."""

import logging
import threading

from fastapi import Depends, FastAPI, File, Form, Header, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from vidstore.access import AccessGate
from vidstore.config import settings
from vidstore.errors import (
    AccessDenied,
    NotFoundError,
    StoreUnavailable,
    UploadFailed,
    ValidationError,
    VidStoreError,
)
from vidstore.models import Comment, MediaFields, MediaItem, Stats
from vidstore.service import VidStoreService
from vidstore.storage.jsonfile import JSONDocumentStore

logger = logging.getLogger(__name__)

app = FastAPI(title="vidstore API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_service: VidStoreService | None = None
_gate: AccessGate | None = None
# Guards first construction; sync routes run on a thread pool.
_init_lock = threading.Lock()

_STATUS_BY_ERROR: dict[type[VidStoreError], int] = {
    ValidationError: 400,
    AccessDenied: 403,
    NotFoundError: 404,
    StoreUnavailable: 500,
    UploadFailed: 502,
}


def get_service() -> VidStoreService:
    """Lazy-initialise the service singleton, creating the document if needed."""
    global _service
    if _service is None:
        with _init_lock:
            if _service is None:
                settings.ensure_dirs()
                store = JSONDocumentStore()
                if store.initialize():
                    logger.info("Created empty document at %s", store.path)
                _service = VidStoreService(store=store)
    return _service


def get_gate() -> AccessGate:
    global _gate
    if _gate is None:
        with _init_lock:
            if _gate is None:
                _gate = AccessGate(settings.admin_secret)
    return _gate


def require_admin(
    x_admin_secret: str | None = Header(None),
    gate: AccessGate = Depends(get_gate),
) -> None:
    """Fail closed before any privileged route body runs."""
    gate.require(x_admin_secret)


@app.exception_handler(VidStoreError)
async def handle_vidstore_error(request, exc: VidStoreError) -> JSONResponse:
    status = _STATUS_BY_ERROR.get(type(exc), 500)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"message": str(exc)})


# ---------- Request Models ----------

class AddComment(BaseModel):
    user: str = ""
    text: str = ""


# ---------- Public Routes ----------

@app.get("/")
def read_root():
    return {"message": "vidstore backend is running"}


@app.get("/api/videos")
def list_videos(svc: VidStoreService = Depends(get_service)) -> list[MediaItem]:
    return svc.list_media()


@app.get("/api/videos/{video_id}/comments")
def list_comments(video_id: int, svc: VidStoreService = Depends(get_service)) -> list[Comment]:
    return svc.list_comments(video_id)


@app.post("/api/videos/{video_id}/comments", status_code=201)
def add_comment(video_id: int, payload: AddComment, svc: VidStoreService = Depends(get_service)) -> Comment:
    return svc.add_comment(video_id, payload.user, payload.text)


# ---------- Admin Routes ----------

@app.get("/api/admin/comments", dependencies=[Depends(require_admin)])
def list_all_comments(svc: VidStoreService = Depends(get_service)) -> list[Comment]:
    return svc.list_all_comments()


@app.get("/api/admin/stats", dependencies=[Depends(require_admin)])
def stats(svc: VidStoreService = Depends(get_service)) -> Stats:
    return svc.stats()


@app.delete("/api/admin/videos/{video_id}", dependencies=[Depends(require_admin)])
def delete_video(video_id: int, svc: VidStoreService = Depends(get_service)):
    result = svc.remove_media(video_id)
    return {
        "message": "Video and associated comments deleted successfully",
        "videoId": result.media_id,
        "commentsRemoved": result.comments_removed,
    }


@app.delete("/api/admin/comments/{comment_id}", dependencies=[Depends(require_admin)])
def delete_comment(comment_id: int, svc: VidStoreService = Depends(get_service)):
    svc.remove_comment(comment_id)
    return {"message": "Comment deleted successfully"}


@app.post("/api/admin/videos", status_code=201, dependencies=[Depends(require_admin)])
def upload_video(
    file: UploadFile = File(...),
    title_key: str = Form(""),
    channel: str = Form(""),
    desc_key: str = Form(""),
    views_key: str = Form(""),
    subs_key: str = Form(""),
    svc: VidStoreService = Depends(get_service),
) -> MediaItem:
    fields = MediaFields(
        title_key=title_key,
        channel=channel,
        desc_key=desc_key,
        views_key=views_key,
        subs_key=subs_key,
    )
    return svc.upload_media(file.file.read(), fields, filename=file.filename)


if __name__ == "__main__":
    import uvicorn

    get_service()
    uvicorn.run(app, host=settings.host, port=settings.port)
