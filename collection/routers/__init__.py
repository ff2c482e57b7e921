from .collections import router as collections_router

__all__ = ["collections_router"]
