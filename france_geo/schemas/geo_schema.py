from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DepartmentSchema:
    class Create(BaseModel):
        department_code: str = Field(..., description="Department code, e.g. 34 or 2A")
        department_name: str = Field(..., description="Department name")
        model_config = ConfigDict(from_attributes=True)

    class Out(Create):
        department_id: int
        population: int = Field(0, description="Sum of the populations of its cities")
        cities: List[str] = Field(default_factory=list, description="Names of its cities")


class CitySchema:
    class Create(BaseModel):
        city_name: str = Field(..., description="City name")
        population: int = Field(..., description="Number of inhabitants")
        department_code: str = Field(..., description="Code of the owning department")
        model_config = ConfigDict(from_attributes=True)

    class Out(Create):
        city_id: int


class ErrorResponse(BaseModel):
    timestamp: str
    status: int
    error: str
    message: str
    path: str
    error_code: Optional[str] = None


class DeleteResponse(BaseModel):
    detail: str
