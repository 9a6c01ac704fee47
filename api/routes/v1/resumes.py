"""Resume download endpoint."""

from fastapi import APIRouter, Depends, Path
from fastapi.responses import FileResponse

from api.dependencies import get_resume_storage
from api.schemas.common import ERROR_RESPONSES
from core.storage.local import LocalStorage

router = APIRouter(prefix="/resumes", responses=ERROR_RESPONSES)


@router.get("/{filename}", summary="Download Resume", response_class=FileResponse)
async def download_resume(
    filename: str = Path(..., description="Stored resume filename"),
    storage: LocalStorage = Depends(get_resume_storage),
):
    """Stream a stored resume. Names containing '..' or '/' are refused."""
    file_path = storage.path_for(filename)
    return FileResponse(file_path, filename=filename)
