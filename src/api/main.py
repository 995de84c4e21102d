"""FastAPI application entry point."""

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import asyncpg
import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from src.config import configure_logging, get_settings
from src.database import close_pool, create_pool
from src.models import City, Cuisine, ErrorResponse, MealType, Restaurant, SearchResponse
from src.search import (
    CatalogRepository,
    CityRequiredError,
    RestaurantSearcher,
    SearchQueryError,
    first_values,
    parse_search_params,
)
from src.monitoring.middleware import MetricsMiddleware, ErrorTrackingMiddleware, metrics_endpoint
from src.monitoring.database_metrics import DatabaseMetricsCollector

logger = structlog.get_logger()
settings = get_settings()

GENERIC_ERROR = "Something went wrong"
CLIENT_ERROR_RESPONSES = {400: {"model": ErrorResponse}}

# Global instances
pool: asyncpg.Pool | None = None
restaurant_searcher: RestaurantSearcher | None = None
catalog: CatalogRepository | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    global pool, restaurant_searcher, catalog

    configure_logging(settings.log_level, json_logs=settings.app_env == "production")
    logger.info("application_starting", app_name=settings.app_name, env=settings.app_env)

    pool = await create_pool(settings)
    restaurant_searcher = RestaurantSearcher(pool)
    catalog = CatalogRepository(pool)

    db_metrics = DatabaseMetricsCollector(pool, interval=settings.db_metrics_interval_seconds)
    await db_metrics.start()

    yield

    logger.info("application_shutting_down")
    await db_metrics.stop()
    await close_pool(pool)
    pool = None
    restaurant_searcher = None
    catalog = None


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="EazyFind Search API",
        description="Restaurant discovery: filtered, geospatial and paginated search",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add monitoring middleware
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(ErrorTrackingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Content-Type",
            "Content-Length",
            "Accept-Encoding",
            "X-CSRF-Token",
            "Authorization",
        ],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = (time.time() - start_time) * 1000
        logger.info(
            "request_completed",
            method=request.method,
            path=str(request.url.path),
            status_code=response.status_code,
            process_time_ms=round(process_time, 2),
        )

        return response

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": "0.1.0",
        }

    @app.get("/metrics")
    async def metrics():
        """Prometheus metrics endpoint."""
        return metrics_endpoint()

    @app.get(
        "/restaurants",
        response_model=SearchResponse,
        response_model_exclude_none=True,
        responses=CLIENT_ERROR_RESPONSES,
    )
    @app.get(
        "/api/restaurants",
        response_model=SearchResponse,
        response_model_exclude_none=True,
        responses=CLIENT_ERROR_RESPONSES,
    )
    @app.get(
        "/api/search",
        response_model=SearchResponse,
        response_model_exclude_none=True,
        responses=CLIENT_ERROR_RESPONSES,
    )
    async def search_restaurants(request: Request):
        """Search restaurants.

        Accepts name/q, minCost/min_cost, maxCost/max_cost, rating,
        discount (percent), free, city, area, cuisine, cuisines,
        cuisineIds, mealtype/meal_type, mealtypes, mealtypeIds,
        lat, lon, radius, sort and page.
        """
        filters = parse_search_params(first_values(request.query_params))

        try:
            return await restaurant_searcher.search(filters)
        except SearchQueryError:
            raise HTTPException(status_code=400, detail=GENERIC_ERROR)

    @app.get("/restaurants/", responses=CLIENT_ERROR_RESPONSES, include_in_schema=False)
    @app.get("/api/restaurants/", responses=CLIENT_ERROR_RESPONSES, include_in_schema=False)
    async def restaurants_without_city():
        raise HTTPException(status_code=400, detail="City is required")

    @app.get(
        "/restaurants/{city}",
        response_model=list[Restaurant],
        response_model_exclude_none=True,
        responses=CLIENT_ERROR_RESPONSES,
    )
    @app.get(
        "/api/restaurants/{city}",
        response_model=list[Restaurant],
        response_model_exclude_none=True,
        responses=CLIENT_ERROR_RESPONSES,
    )
    async def restaurants_by_city(city: str):
        """Top discounted restaurants for a city."""
        try:
            return await catalog.restaurants_by_city(city)
        except CityRequiredError:
            raise HTTPException(status_code=400, detail="City is required")
        except Exception:
            raise HTTPException(status_code=400, detail=GENERIC_ERROR)

    @app.get("/cities", response_model=list[City], responses=CLIENT_ERROR_RESPONSES)
    @app.get("/api/cities", response_model=list[City], responses=CLIENT_ERROR_RESPONSES)
    async def list_cities():
        """All supported cities."""
        try:
            return await catalog.list_cities()
        except Exception:
            raise HTTPException(status_code=400, detail=GENERIC_ERROR)

    @app.get("/cuisines", response_model=list[Cuisine], responses=CLIENT_ERROR_RESPONSES)
    @app.get("/api/cuisines", response_model=list[Cuisine], responses=CLIENT_ERROR_RESPONSES)
    async def list_cuisines():
        """All cuisines, for the cuisine multi-select."""
        try:
            return await catalog.list_cuisines()
        except Exception:
            raise HTTPException(status_code=400, detail=GENERIC_ERROR)

    @app.get("/meal-types", response_model=list[MealType], responses=CLIENT_ERROR_RESPONSES)
    @app.get("/api/meal-types", response_model=list[MealType], responses=CLIENT_ERROR_RESPONSES)
    async def list_meal_types():
        """All meal types."""
        try:
            return await catalog.list_meal_types()
        except Exception:
            raise HTTPException(status_code=400, detail=GENERIC_ERROR)

    return app


# Create app instance
app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
