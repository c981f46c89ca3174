"""FastAPI routes for region lookup."""

from fastapi import APIRouter
from pydantic import BaseModel

from regions.directory import default_directory

router = APIRouter(prefix="/regions", tags=["regions"])


class RegionResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"code": "330000", "name": "浙江省"}]}}

    code: str
    name: str


@router.get("/provinces", response_model=list[RegionResponse])
async def list_provinces():
    return default_directory().provinces()


@router.get("/provinces/{province_code}/cities", response_model=list[RegionResponse])
async def list_cities(province_code: str):
    return default_directory().cities(province_code)


@router.get("/provinces/{province_code}/cities/{city_code}/districts", response_model=list[RegionResponse])
async def list_districts(province_code: str, city_code: str):
    return default_directory().districts(province_code, city_code)
