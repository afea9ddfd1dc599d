"""Main FastAPI application."""

import logging

from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware

from .database import engine, Base
from . import models  # noqa: F401  registers tables on Base
from .routes import context, embeddings, files

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(title="CodeContext Backend")

# Setup CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

api_router = APIRouter(prefix="/api")

api_router.include_router(files.router)
api_router.include_router(embeddings.router)
api_router.include_router(context.router)

app.include_router(api_router)
