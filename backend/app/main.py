# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from app.core.settings import settings
from app.routers.form import router as form_router
from app.routers.health import router as health_router
from app.routers.payments import router as payments_router
from app.routers.submit import router as submit_router

app = FastAPI(title=settings.api_title)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logging.getLogger("uvicorn.error").info(
    f"[main] mail relay = {settings.smtp_host}:{settings.smtp_port}, paypal = {settings.paypal_base_url}"
)

# Routers
app.include_router(form_router)
app.include_router(submit_router)
app.include_router(payments_router)
app.include_router(health_router)

@app.get("/__routes")
async def __routes():
    # schema paths also cover routes from included routers
    return [
        {"methods": sorted(m.upper() for m in ops), "path": path}
        for path, ops in app.openapi()["paths"].items()
    ]
