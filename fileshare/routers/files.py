import io
import mimetypes
from urllib.parse import quote

from fastapi import APIRouter, Depends, UploadFile, File as FastAPIFile
from fastapi.responses import StreamingResponse
from starlette.concurrency import run_in_threadpool

from fileshare.dependencies import get_current_user_id, get_file_registry
from fileshare.schemas import DownloadRequest, FileEntry, MessageResponse, UploadResponse
from fileshare.services.registry import FileRegistry

router = APIRouter()


# --- upload a new file ---
@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = FastAPIFile(...),
    user_id: int = Depends(get_current_user_id),
    registry: FileRegistry = Depends(get_file_registry),
):
    content = await file.read()
    meta = await run_in_threadpool(
        registry.upload,
        user_id,
        file.filename or "file",
        content,
        file.content_type,
    )

    # the code is only shown to the uploader here
    return UploadResponse(message="File uploaded", code=meta.code)


# --- show user's files ---
@router.get("/files", response_model=list[FileEntry])
def list_files(
    user_id: int = Depends(get_current_user_id),
    registry: FileRegistry = Depends(get_file_registry),
):
    return [
        FileEntry(id=f.id, filename=f.original_name, uploaded_at=f.uploaded_at)
        for f in registry.list_for_owner(user_id)
    ]


# --- delete a file ---
@router.delete("/delete/{file_id}", response_model=MessageResponse)
def delete_file(
    file_id: int,
    user_id: int = Depends(get_current_user_id),
    registry: FileRegistry = Depends(get_file_registry),
):
    registry.delete(user_id, file_id)
    return MessageResponse(message="File deleted")


# --- download a file, gated by its access code only ---
@router.post("/download/{file_id}")
def download_file(
    file_id: int,
    body: DownloadRequest | None = None,
    registry: FileRegistry = Depends(get_file_registry),
):
    code = body.code if body else ""
    file, content = registry.open_for_download(file_id, code)
    content_type = mimetypes.guess_type(file.original_name)[0] or "application/octet-stream"

    return StreamingResponse(
        io.BytesIO(content),
        media_type=content_type,
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(file.original_name)}"
        },
    )
