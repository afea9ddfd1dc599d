"""Request-scoped dependencies."""

from typing import Callable, Dict, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from ..config import load_config
from ..core import Embedder, make_embedder
from ..storage import FileStore, SqlFileStore
from .database import get_db

EmbedderFactory = Callable[[Optional[str]], Embedder]


def get_config() -> Dict:
    return load_config()


def get_file_store(db: Session = Depends(get_db)) -> FileStore:
    return SqlFileStore(db)


def get_embedder_factory(cfg: Dict = Depends(get_config)) -> EmbedderFactory:
    """Build a fresh embedder per request from the caller's credential."""

    def factory(credential: Optional[str]) -> Embedder:
        return make_embedder(cfg, credential=credential)

    return factory
