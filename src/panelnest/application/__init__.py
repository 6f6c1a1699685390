"""Application layer - use cases and orchestration."""

from .commands import OptimizePanelsCommand
from .dtos import OptimizationOutput, OptimizationRequest, SheetSearchInput

__all__ = [
    "OptimizationOutput",
    "OptimizationRequest",
    "OptimizePanelsCommand",
    "SheetSearchInput",
]
