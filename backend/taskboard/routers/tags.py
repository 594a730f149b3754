from fastapi import APIRouter, Depends, HTTPException
from typing import List
from sqlmodel import select

from ..db import get_session
from ..models import Tag


router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/", response_model=List[Tag])
def list_tags(session=Depends(get_session)):
    return session.exec(select(Tag).order_by(Tag.name)).all()


@router.get("/{tag_id}", response_model=Tag)
def get_tag(tag_id: int, session=Depends(get_session)):
    obj = session.get(Tag, tag_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Etiqueta no encontrada")
    return obj
