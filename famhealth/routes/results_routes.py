# famhealth/routes/results_routes.py
import logging
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from famhealth.auth.deps import get_current_user, get_rate_limited_user
from famhealth.db.session import get_db
from famhealth.models.family_member import FamilyMember
from famhealth.models.test_result import TestResult
from famhealth.schemas.results import ManualResultIn, TestResultOut
from famhealth.services import storage
from famhealth.utils.limiter import limiter, user_rate_key

router = APIRouter(prefix="/api/results", tags=["results"])
logger = logging.getLogger("famhealth")

MAX_FILE_MB = int(os.getenv("MAX_FILE_MB", "10"))
ALLOWED_UPLOAD_TYPES = {"application/pdf", "text/plain", "text/csv"}


def result_out(row: TestResult) -> TestResultOut:
    out = TestResultOut.model_validate(row, from_attributes=True)
    out.public_url = storage.public_url(row.file_path)
    return out


def _check_family_member(db: Session, user_id: str, member_id: Optional[str]) -> Optional[str]:
    if not member_id:
        return None
    exists = (
        db.query(FamilyMember.id)
        .filter(FamilyMember.id == member_id, FamilyMember.user_id == str(user_id))
        .first()
    )
    if not exists:
        raise HTTPException(status_code=404, detail="Family member not found")
    return member_id


@router.get("", response_model=List[TestResultOut])
def list_results(
    family_member_id: Optional[str] = None,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    qry = db.query(TestResult).filter(TestResult.user_id == str(user.id))
    if family_member_id:
        qry = qry.filter(TestResult.family_member_id == family_member_id)
    return [result_out(r) for r in qry.order_by(TestResult.created_at.desc()).all()]


@router.post("", status_code=201, response_model=TestResultOut)
def add_manual_result(
    payload: ManualResultIn,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    content = (payload.content or "").strip()
    if not content:
        raise HTTPException(status_code=400, detail="content is required")
    row = TestResult(
        user_id=str(user.id),
        family_member_id=_check_family_member(db, user.id, payload.family_member_id),
        type="manual",
        content=content,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return result_out(row)


def _save_upload(
    db: Session,
    user_id: str,
    family_member_id: Optional[str],
    data: bytes,
    filename: Optional[str],
) -> TestResult:
    member_id = _check_family_member(db, user_id, family_member_id)
    path = storage.store_user_upload(str(user_id), data, filename)
    row = TestResult(
        user_id=str(user_id),
        family_member_id=member_id,
        type="file",
        content=os.path.basename(filename or "") or None,
        file_path=path,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.post("/upload", status_code=201, response_model=TestResultOut)
@limiter.limit("10/minute", key_func=user_rate_key)
async def upload_result(
    request: Request,
    file: UploadFile = File(...),
    family_member_id: Optional[str] = Form(default=None),
    db: Session = Depends(get_db),
    user=Depends(get_rate_limited_user),
):
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if len(data) / (1024 * 1024) > MAX_FILE_MB:
        raise HTTPException(status_code=413, detail=f"File size exceeds the {MAX_FILE_MB}MB limit")

    mt = (file.content_type or "").lower()
    if not (mt in ALLOWED_UPLOAD_TYPES or mt.startswith("image/")):
        raise HTTPException(status_code=415, detail=f"Unsupported file type: {mt or 'unknown'}")

    # session work stays off the event loop
    row = await run_in_threadpool(_save_upload, db, user.id, family_member_id, data, file.filename)
    logger.info({"function": "upload_result", "user_id": str(user.id), "bytes": len(data), "content_type": mt})
    return result_out(row)


@router.delete("/{result_id}", status_code=204)
def delete_result(result_id: str, db: Session = Depends(get_db), user=Depends(get_current_user)):
    row = (
        db.query(TestResult)
        .filter(TestResult.id == result_id, TestResult.user_id == str(user.id))
        .first()
    )
    if not row:
        raise HTTPException(status_code=404, detail="Result not found")
    file_path = row.file_path
    db.delete(row)
    db.commit()
    storage.delete_upload(file_path)
