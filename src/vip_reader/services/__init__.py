"""Services layer - session, catalog and background work."""

from vip_reader.services.api_workers import CallWorker, ProgressSyncWorker, WorkerSignals
from vip_reader.services.catalog_store import BUILTIN_SEED, CatalogStore
from vip_reader.services.logging_setup import setup_logging
from vip_reader.services.session_manager import AuthFailure, SessionManager
from vip_reader.services.settings_manager import SettingsManager

__all__ = [
	"AuthFailure",
	"BUILTIN_SEED",
	"CallWorker",
	"CatalogStore",
	"ProgressSyncWorker",
	"SessionManager",
	"SettingsManager",
	"WorkerSignals",
	"setup_logging",
]
