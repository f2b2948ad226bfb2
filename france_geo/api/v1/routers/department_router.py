from typing import List

from fastapi import APIRouter, Depends, Response, status

from france_geo.api.v1.dependencies import get_uow
from france_geo.domain.unit_of_work import UnitOfWork
from france_geo.schemas.geo_schema import DeleteResponse, DepartmentSchema
from france_geo.services.department_service import DepartmentService
from france_geo.services.export_service import ExportService
from france_geo.utils.logger import get_logger


logger = get_logger("department_router")


class DepartmentRouter:
    def __init__(self):
        self.router = APIRouter(prefix="/departments", tags=["Departments"])
        self._register()

    def _register(self):
        self.router.get("", response_model=List[DepartmentSchema.Out])(
            self._get_departments
        )
        self.router.get("/code/{code}", response_model=DepartmentSchema.Out)(
            self._get_department_by_code
        )
        self.router.get("/{code}/export/pdf", response_class=Response)(
            self._export_pdf
        )
        self.router.get("/{department_id}", response_model=DepartmentSchema.Out)(
            self._get_department
        )
        self.router.post(
            "",
            response_model=DepartmentSchema.Out,
            status_code=status.HTTP_201_CREATED,
        )(self._create_department)
        self.router.put("/{department_id}", response_model=DepartmentSchema.Out)(
            self._update_department
        )
        self.router.delete("/{department_id}", response_model=DeleteResponse)(
            self._delete_department
        )

    async def _get_departments(self, uow: UnitOfWork = Depends(get_uow)):
        logger.info("Getting departments")
        return DepartmentService(uow).get_all()

    async def _get_department(
        self, department_id: int, uow: UnitOfWork = Depends(get_uow)
    ):
        logger.info(f"Getting department {department_id}")
        return DepartmentService(uow).get_by_id(department_id)

    async def _get_department_by_code(
        self, code: str, uow: UnitOfWork = Depends(get_uow)
    ):
        logger.info(f"Getting department with code {code}")
        return DepartmentService(uow).get_by_code(code)

    async def _create_department(
        self,
        payload: DepartmentSchema.Create,
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info("Creating department")
        return DepartmentService(uow).create(payload)

    async def _update_department(
        self,
        department_id: int,
        payload: DepartmentSchema.Create,
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(f"Updating department {department_id}")
        return DepartmentService(uow).update(department_id, payload)

    async def _delete_department(
        self, department_id: int, uow: UnitOfWork = Depends(get_uow)
    ):
        logger.info(f"Deleting department {department_id}")
        return DepartmentService(uow).delete(department_id)

    async def _export_pdf(self, code: str, uow: UnitOfWork = Depends(get_uow)):
        logger.info(f"Exporting department {code} to PDF")
        content = ExportService(uow).department_pdf(code)
        return Response(
            content=content,
            media_type="application/pdf",
            headers={
                "Content-Disposition": f"attachment; filename=department_{code}.pdf"
            },
        )


department_router = DepartmentRouter().router
