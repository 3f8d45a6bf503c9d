from fastapi import APIRouter

from geography.api.airports import router as airports_router
from geography.api.countries import router as countries_router
from geography.api.public.health import router as health_router
from geography.api.regions import router as regions_router
from geography.graphql.schema import graphql_router


api_router = APIRouter()
api_router.include_router(health_router)

geography_router = APIRouter(prefix="/geography")
geography_router.include_router(countries_router)
geography_router.include_router(regions_router)
geography_router.include_router(airports_router)
geography_router.include_router(graphql_router, prefix="/graphql", tags=["graphql"])

api_router.include_router(geography_router)
