"""
Clinical memo controller
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from datetime import datetime

from database.store import DocumentStore, get_store
from schemas.memo import Memo, MemoUpdate
from services.memos import MemoService
from utils.exceptions import NotFoundError, ValidationError

router = APIRouter()


def get_memos(store: DocumentStore = Depends(get_store)) -> MemoService:
    return MemoService(store)


@router.post("/", response_model=Memo, status_code=201)
async def create_memo(memo: Memo, memos: MemoService = Depends(get_memos)):
    return await memos.create(memo)


@router.get("/", response_model=List[Memo])
async def list_memos(
    patient_id: Optional[str] = Query(None, description="Filter by patient ID"),
    creator_id: Optional[str] = Query(None, description="Filter by author"),
    start: Optional[datetime] = Query(None, description="Created on or after"),
    end: Optional[datetime] = Query(None, description="Created on or before"),
    memos: MemoService = Depends(get_memos),
):
    if patient_id is not None:
        return await memos.get_by_patient_id(patient_id)
    if creator_id is not None:
        return await memos.get_by_creator_id(creator_id)
    if start is not None or end is not None:
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")
        return await memos.get_by_date_range(start, end)
    return await memos.get_all()


@router.get("/recent", response_model=List[Memo])
async def recent_memos(
    limit: int = Query(10, ge=1, le=100), memos: MemoService = Depends(get_memos)
):
    """
    Most recently written memos, newest first
    """
    return await memos.get_recent(limit)


@router.get("/{memo_id}", response_model=Memo)
async def get_memo(memo_id: str, memos: MemoService = Depends(get_memos)):
    memo = await memos.get_by_id(memo_id)
    if not memo:
        raise NotFoundError("Memo not found")
    return memo


@router.put("/{memo_id}", response_model=Memo)
async def update_memo(
    memo_id: str, memo_data: MemoUpdate, memos: MemoService = Depends(get_memos)
):
    return await memos.update(memo_id, memo_data.model_dump(exclude_unset=True))


@router.delete("/{memo_id}")
async def delete_memo(memo_id: str, memos: MemoService = Depends(get_memos)):
    await memos.delete(memo_id)
    return {"message": "Memo deleted successfully", "memo_id": memo_id}
