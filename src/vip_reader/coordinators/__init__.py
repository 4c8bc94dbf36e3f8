"""Coordinators - Orchestration layer connecting UI with business logic."""

from .library_coordinator import LibraryCoordinator
from .reader_controller import ReaderController
from .reader_states import DenialReason, ReaderState

__all__ = [
    "DenialReason",
    "LibraryCoordinator",
    "ReaderController",
    "ReaderState",
]
