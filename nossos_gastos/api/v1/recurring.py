"""Salaries and recurring bills - /v1/salaries, /v1/recurring"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from nossos_gastos.api.v1.schemas import (
    RecurringCreate,
    RecurringSchema,
    RecurringUpdate,
    SalaryCreate,
    SalarySchema,
    SalaryUpdate,
)
from nossos_gastos.api.dependencies import get_recurring_repository, get_salary_repository
from nossos_gastos.infrastructure.database.session import get_db
from nossos_gastos.infrastructure.database.repositories import RecurringRepository, SalaryRepository

router = APIRouter()


@router.post("/salaries", response_model=SalarySchema, status_code=201)
def create_salary(
    body: SalaryCreate,
    db: Session = Depends(get_db),
    salaries: SalaryRepository = Depends(get_salary_repository),
):
    salary = salaries.create_salary(**body.model_dump())
    db.commit()
    return SalarySchema.model_validate(salary)


@router.get("/salaries", response_model=List[SalarySchema])
def list_salaries(salaries: SalaryRepository = Depends(get_salary_repository)):
    return [SalarySchema.model_validate(s) for s in salaries.list_salaries()]


@router.patch("/salaries/{salary_id}", response_model=SalarySchema)
def update_salary(
    salary_id: str,
    body: SalaryUpdate,
    db: Session = Depends(get_db),
    salaries: SalaryRepository = Depends(get_salary_repository),
):
    salary = salaries.update_salary(salary_id, body.changes())
    if salary is None:
        raise HTTPException(status_code=404, detail="Salary not found")
    db.commit()
    return SalarySchema.model_validate(salary)


@router.delete("/salaries/{salary_id}", status_code=204)
def delete_salary(
    salary_id: str,
    db: Session = Depends(get_db),
    salaries: SalaryRepository = Depends(get_salary_repository),
):
    if not salaries.delete_salary(salary_id):
        raise HTTPException(status_code=404, detail="Salary not found")
    db.commit()
    return Response(status_code=204)


@router.post("/recurring", response_model=RecurringSchema, status_code=201)
def create_recurring(
    body: RecurringCreate,
    db: Session = Depends(get_db),
    recurring: RecurringRepository = Depends(get_recurring_repository),
):
    item = recurring.create_recurring(**body.model_dump())
    db.commit()
    return RecurringSchema.model_validate(item)


@router.get("/recurring", response_model=List[RecurringSchema])
def list_recurring(recurring: RecurringRepository = Depends(get_recurring_repository)):
    """Recurring items ordered by day of month"""
    return [RecurringSchema.model_validate(r) for r in recurring.list_recurring()]


@router.patch("/recurring/{recurring_id}", response_model=RecurringSchema)
def update_recurring(
    recurring_id: str,
    body: RecurringUpdate,
    db: Session = Depends(get_db),
    recurring: RecurringRepository = Depends(get_recurring_repository),
):
    """Edit a recurring item; send `is_active: false` to stop projecting it"""
    item = recurring.update_recurring(recurring_id, body.changes())
    if item is None:
        raise HTTPException(status_code=404, detail="Recurring item not found")
    db.commit()
    return RecurringSchema.model_validate(item)


@router.delete("/recurring/{recurring_id}", status_code=204)
def delete_recurring(
    recurring_id: str,
    db: Session = Depends(get_db),
    recurring: RecurringRepository = Depends(get_recurring_repository),
):
    if not recurring.delete_recurring(recurring_id):
        raise HTTPException(status_code=404, detail="Recurring item not found")
    db.commit()
    return Response(status_code=204)
