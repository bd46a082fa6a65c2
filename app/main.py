import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes_activities import router as activities_router
from app.api.routes_availability import router as availability_router
from app.api.routes_batches import router as batches_router
from app.api.routes_dashboard import router as dashboard_router
from app.api.routes_faculty import router as faculty_router
from app.api.routes_free_slots import router as free_slots_router
from app.api.routes_skills import router as skills_router
from app.api.routes_students import router as students_router
from app.core.config import settings
from app.db import Base, engine
from app import models  # noqa: F401  (registers tables on Base.metadata)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title="Institute Scheduling Service")
Base.metadata.create_all(bind=engine)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(skills_router)
app.include_router(faculty_router)
app.include_router(availability_router)
app.include_router(students_router)
app.include_router(batches_router)
app.include_router(free_slots_router)
app.include_router(activities_router)
app.include_router(dashboard_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
