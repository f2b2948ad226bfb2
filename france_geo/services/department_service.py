import re
from typing import List

from sqlalchemy.exc import IntegrityError

from france_geo.domain.exceptions import (
    DepartmentHasCities,
    DepartmentNotFound,
    DuplicateKey,
    InvalidArgument,
)
from france_geo.domain.mappers import DepartmentMapper
from france_geo.domain.unit_of_work import UnitOfWork
from france_geo.models.department_model import Department
from france_geo.schemas.geo_schema import DepartmentSchema
from france_geo.services.integrity import raise_duplicate_key
from france_geo.utils.logger import get_logger


logger = get_logger("department_service")

DEPARTMENT_CODE_PATTERN = re.compile(r"^[0-9A-Za-z]{2,3}$")


def validate_department_code(code: str) -> str:
    """Return the trimmed code or raise InvalidArgument."""
    if code is None or not code.strip():
        raise InvalidArgument("Department code must not be blank")
    code = code.strip()
    if not DEPARTMENT_CODE_PATTERN.match(code):
        raise InvalidArgument(
            f"Department code '{code}' must be 2 to 3 alphanumeric characters"
        )
    return code


def validate_id(entity_id: int, entity_type: str) -> None:
    if entity_id is None or entity_id <= 0:
        raise InvalidArgument(f"{entity_type} id must be a positive number")


class DepartmentService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    # -------- queries -------------------------------------------------
    def get_all(self) -> List[DepartmentSchema.Out]:
        return DepartmentMapper.to_out_list(self.uow.departments.get_all())

    def get_by_id(self, department_id: int) -> DepartmentSchema.Out:
        return DepartmentMapper.to_out(self._get_entity(department_id))

    def get_by_code(self, code: str) -> DepartmentSchema.Out:
        code = validate_department_code(code)
        department = self.uow.departments.get_by_code(code)
        if not department:
            raise DepartmentNotFound("code", code)
        return DepartmentMapper.to_out(department)

    def exists_by_id(self, department_id: int) -> bool:
        return self.uow.departments.exists(department_id)

    def exists_by_code(self, code: str) -> bool:
        if code is None or not code.strip():
            return False
        return self.uow.departments.exists_by_code(code.strip())

    # -------- commands ------------------------------------------------
    def create(self, payload: DepartmentSchema.Create) -> DepartmentSchema.Out:
        self._validate(payload)
        code = payload.department_code.strip()
        if self.uow.departments.exists_by_code(code):
            raise DuplicateKey("Department", "code", code)

        with self.uow:
            department = DepartmentMapper.to_entity(payload)
            self.uow.departments.add(department)
            self._commit(department)
            logger.info(f"Created department {department}")
            return DepartmentMapper.to_out(department)

    def update(
        self, department_id: int, payload: DepartmentSchema.Create
    ) -> DepartmentSchema.Out:
        validate_id(department_id, "Department")
        self._validate(payload)
        with self.uow:
            department = self._get_entity(department_id)
            code = payload.department_code.strip()
            same_code = self.uow.departments.get_by_code(code)
            if same_code and same_code.department_id != department_id:
                raise DuplicateKey("Department", "code", code)

            DepartmentMapper.update_entity(payload, department)
            self._commit(department)
            logger.info(f"Updated department {department_id}")
            return DepartmentMapper.to_out(department)

    def delete(self, department_id: int) -> dict:
        """Delete a department; refused while cities still reference it."""
        with self.uow:
            department = self._get_entity(department_id)
            city_count = self.uow.departments.count_cities(department_id)
            if city_count:
                raise DepartmentHasCities(department_id, city_count)
            self.uow.departments.delete(department)
            self.uow.commit()
            logger.info(f"Deleted department {department_id}")
            return {"detail": "Department deleted"}

    # -------- helpers -------------------------------------------------
    def _get_entity(self, department_id: int) -> Department:
        validate_id(department_id, "Department")
        department = self.uow.departments.get(department_id)
        if not department:
            raise DepartmentNotFound("id", department_id)
        return department

    def _commit(self, department: Department) -> None:
        try:
            self.uow.commit()
        except IntegrityError as e:
            self.uow.rollback()
            raise_duplicate_key(
                e,
                "Department",
                {"department_code": ("code", department.department_code)},
            )

    @staticmethod
    def _validate(payload: DepartmentSchema.Create) -> None:
        if payload is None:
            raise InvalidArgument("Department data must not be empty")
        errors = []
        try:
            validate_department_code(payload.department_code)
        except InvalidArgument as e:
            errors.append(e.message)
        if payload.department_name is None or not payload.department_name.strip():
            errors.append("Department name must not be blank")
        if errors:
            raise InvalidArgument("; ".join(errors))
