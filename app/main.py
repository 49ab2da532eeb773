# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.backend import BackendError
from app.config import settings
from app.routers import auth, timetable, admin_sessions, calendar, notices

import time
import logging
from fastapi import Request
from app.logging_config import setup_logging


setup_logging()
logger = logging.getLogger("app")


app = FastAPI(title="Institute Timetable", version="1.0.0")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


# 後端拒絕：訊息與衝堂資料原樣回給前端
@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    content = {"detail": exc.message}
    if exc.conflict is not None:
        content["conflict"] = exc.conflict
    return JSONResponse(status_code=exc.status_code, content=content)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth.router)
app.include_router(timetable.router)
app.include_router(admin_sessions.router)
app.include_router(calendar.router)
app.include_router(notices.router)

@app.get("/")
def root():
    return {"message": "Timetable front-end is running!", "backend": settings.BACKEND_URL}
