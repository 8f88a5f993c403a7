# plategenie/app/main.py
from __future__ import annotations
import logging
import sys
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from plategenie.app.config import get_settings
from plategenie.app.routers.auth import router as auth_router
from plategenie.app.routers.generation import router as generation_router
from plategenie.app.routers.recipes import router as recipes_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

app = FastAPI(title="PlateGenie API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(recipes_router)
app.include_router(generation_router)


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Hello from PlateGenie Backend!"


@app.get("/health")
def health():
    return {"ok": True}
