from fastapi import APIRouter, Depends, HTTPException
from typing import List
from sqlmodel import select

from ..db import get_session
from ..models import Person


router = APIRouter(prefix="/persons", tags=["persons"])


@router.get("/", response_model=List[Person])
def list_persons(session=Depends(get_session)):
    return session.exec(select(Person).order_by(Person.id)).all()


@router.get("/{person_id}", response_model=Person)
def get_person(person_id: int, session=Depends(get_session)):
    obj = session.get(Person, person_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Persona no encontrada")
    return obj
