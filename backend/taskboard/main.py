from fastapi import FastAPI
from contextlib import asynccontextmanager

from .config import settings
from .db import init_db
from .routers import persons, tags, tasks


@asynccontextmanager
async def lifespan(app: FastAPI):
    # En producción el esquema lo gestiona Alembic; la carga de ejemplo se hace con run_seeder.py
    if not settings.is_production:
        init_db()
    yield


app = FastAPI(title="Taskboard API", lifespan=lifespan)


app.include_router(persons.router)
app.include_router(tags.router)
app.include_router(tasks.router)


@app.get("/")
def root():
    return {"status": "ok", "service": "Taskboard API"}
