import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response

from partyassets.api.deps import get_pr3_importer, require_auth
from partyassets.config import settings
from partyassets.pr3import import PR3Importer

logger = logging.getLogger("partyassets.api.imports")
router = APIRouter(prefix="/imports", tags=["Imports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _read_upload(upload: UploadFile) -> bytes:
    max_bytes = settings.security.max_upload_mb * 1024 * 1024
    content = upload.file.read()
    if max_bytes and len(content) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large; max {settings.security.max_upload_mb}MB",
        )
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    return content


@router.post("/pr3")
def import_pr3(
    file: UploadFile = File(...),
    importer: PR3Importer = Depends(get_pr3_importer),
    _auth=Depends(require_auth),
):
    """
    Imports parking permits from a PR3 export.
    Returns the counters as JSON, or the failed rows as a spreadsheet when any row failed.
    """
    result = importer.import_from_excel(_read_upload(file))
    logger.info("pr3 upload processed", extra={"upload": file.filename, **result.to_dict()})
    if result.failed == 0:
        return result.to_dict()

    return Response(
        content=result.failed_excel_data,
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": 'attachment; filename="pr3-import-failures.xlsx"',
            "X-Import-Total": str(result.total),
            "X-Import-Successful": str(result.successful),
            "X-Import-Failed": str(result.failed),
        },
    )
