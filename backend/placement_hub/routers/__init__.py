from .coordinators import router as coordinators_router

__all__ = ["coordinators_router"]
