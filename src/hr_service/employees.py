from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .identifiers import generate_employee_id
from .models import Employee

logger = logging.getLogger(__name__)


class EmployeeStore:
    def __init__(self, db: Session, id_generator: Callable[[], str] = generate_employee_id):
        self.db = db
        self._generate_id = id_generator

    def create(self, name: str, department: str, email: str | None = None) -> Employee:
        employee = Employee(
            employee_id=self._generate_id(),
            name=name,
            department=department,
            email=email,
        )
        self.db.add(employee)
        try:
            self.db.commit()
        except IntegrityError:
            # коллизия employee_id: повторной генерации нет, ошибка уходит наверх
            self.db.rollback()
            raise
        self.db.refresh(employee)
        logger.info("Created employee %s (id=%s)", employee.employee_id, employee.id)
        return employee

    def find_by_employee_id(self, employee_id: str) -> Employee | None:
        return self.db.execute(
            select(Employee).where(Employee.employee_id == employee_id)
        ).scalar_one_or_none()
