"""
Entry point de la API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

from pickem.core.config import configure_logging, get_settings
from pickem.database import Database, create_indexes

from pickem.controllers.auth_controller import router as auth_router
from pickem.controllers.games_controller import router as games_router
from pickem.controllers.picks_controller import router as picks_router
from pickem.controllers.leaderboard_controller import router as leaderboard_router
from pickem.controllers.admin_controller import router as admin_router
from pickem.controllers.health_controller import router as health_router

settings = get_settings()
configure_logging(settings)

# Parse CORS origins
CORS_ORIGINS = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


class CORSMiddleware(BaseHTTPMiddleware):
    """
    CORS middleware that answers OPTIONS preflight before routing,
    so query parameter validation never rejects a preflight.
    """

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin", "")
        allowed = origin in CORS_ORIGINS

        if request.method == "OPTIONS":
            if not allowed:
                return Response(status_code=403, content="Origin not allowed")
            return Response(
                status_code=200,
                headers={
                    "Access-Control-Allow-Origin": origin,
                    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
                    "Access-Control-Allow-Headers": "Authorization, Content-Type, Accept, Origin",
                    "Access-Control-Allow-Credentials": "true",
                    "Access-Control-Max-Age": "86400",
                }
            )

        response = await call_next(request)

        if allowed:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    await Database.connect()
    await create_indexes()
    yield
    await Database.disconnect()

# Creo la app
app = FastAPI(
    title="Football Pick'em API",
    description="Backend de la porra semanal de fútbol americano",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(CORSMiddleware)

# Agrego todos los routers de los controllers al app
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(games_router)
app.include_router(picks_router)
app.include_router(leaderboard_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    # Endpoint raíz, sirve para verificar que la API está levantada
    return {
        "name": "Football Pick'em API",
        "version": "1.0.0",
        "docs": "/docs"
    }
