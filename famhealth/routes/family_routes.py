# famhealth/routes/family_routes.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from famhealth.auth.deps import get_current_user
from famhealth.db.session import get_db
from famhealth.models.family_member import CHILD_RELATIONS, FamilyMember
from famhealth.schemas.conditions import ConditionDetailIn
from famhealth.schemas.family import FamilyMemberIn, FamilyMemberOut
from famhealth.services.conditions import (
    build_condition_detail,
    conditions_from_details,
    details_from_labels,
    details_to_display_list,
)
from famhealth.utils.app import list_family_members

router = APIRouter(prefix="/api/family", tags=["family"])


def member_out(member: FamilyMember) -> FamilyMemberOut:
    return FamilyMemberOut(
        id=member.id,
        relation=member.relation,
        name=member.name,
        age=member.age,
        is_alive=member.is_alive,
        age_at_death=member.age_at_death,
        cause_of_death=member.cause_of_death,
        condition_list=list(member.condition_list or []),
        condition_details=list(member.condition_details or []),
        display_conditions=details_to_display_list(member.condition_details, member.condition_list or []),
        created_at=member.created_at,
    )


def _get_member(db: Session, user_id: str, member_id: str) -> FamilyMember:
    member = (
        db.query(FamilyMember)
        .filter(FamilyMember.id == member_id, FamilyMember.user_id == str(user_id))
        .first()
    )
    if not member:
        raise HTTPException(status_code=404, detail="Family member not found")
    return member


def _apply(member: FamilyMember, payload: FamilyMemberIn) -> None:
    member.relation = payload.relation.strip()
    member.name = (payload.name or "").strip() or None
    member.age = payload.age
    member.is_alive = payload.is_alive
    member.age_at_death = None if payload.is_alive else payload.age_at_death
    member.cause_of_death = None if payload.is_alive else payload.cause_of_death
    labels = [c for c in payload.condition_list if c]
    member.condition_list = labels
    member.condition_details = details_from_labels(labels)


@router.get("", response_model=List[FamilyMemberOut])
def list_family(db: Session = Depends(get_db), user=Depends(get_current_user)):
    return [member_out(m) for m in list_family_members(db, user.id)]


@router.get("/children", response_model=List[FamilyMemberOut])
def list_children(db: Session = Depends(get_db), user=Depends(get_current_user)):
    return [member_out(m) for m in list_family_members(db, user.id) if m.relation in CHILD_RELATIONS]


@router.post("", status_code=201, response_model=FamilyMemberOut)
def add_family_member(payload: FamilyMemberIn, db: Session = Depends(get_db), user=Depends(get_current_user)):
    member = FamilyMember(user_id=str(user.id))
    _apply(member, payload)
    db.add(member)
    db.commit()
    db.refresh(member)
    return member_out(member)


@router.put("/{member_id}", response_model=FamilyMemberOut)
def update_family_member(
    member_id: str,
    payload: FamilyMemberIn,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    member = _get_member(db, user.id, member_id)
    _apply(member, payload)
    db.commit()
    db.refresh(member)
    return member_out(member)


@router.delete("/{member_id}", status_code=204)
def delete_family_member(member_id: str, db: Session = Depends(get_db), user=Depends(get_current_user)):
    member = _get_member(db, user.id, member_id)
    db.delete(member)
    db.commit()


@router.post("/{member_id}/conditions", status_code=201, response_model=FamilyMemberOut)
def add_member_condition(
    member_id: str,
    payload: ConditionDetailIn,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    member = _get_member(db, user.id, member_id)
    try:
        detail = build_condition_detail(payload.condition, payload.subtype, payload.age_at_diagnosis, payload.notes)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    # new lists so the change is flushed
    member.condition_details = list(member.condition_details or []) + [detail]
    member.condition_list = list(member.condition_list or []) + [detail.get("category") or detail["label"]]
    db.commit()
    db.refresh(member)
    return member_out(member)


@router.delete("/{member_id}/conditions/{index}", response_model=FamilyMemberOut)
def remove_member_condition(
    member_id: str,
    index: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    member = _get_member(db, user.id, member_id)
    details = list(member.condition_details or [])
    if index < 0 or index >= len(details):
        raise HTTPException(status_code=404, detail="Condition not found")
    del details[index]
    member.condition_details = details
    member.condition_list = conditions_from_details(details)
    db.commit()
    db.refresh(member)
    return member_out(member)
