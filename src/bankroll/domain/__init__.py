"""Domain layer for bankroll application."""

# Services are imported lazily: the database layer imports domain entities,
# and the services import the database layer.
_SERVICES = {
    "SessionService": "bankroll.domain.session",
    "CSVImportService": "bankroll.domain.csv_import",
    "AccountService": "bankroll.domain.account",
    "ProgressService": "bankroll.domain.progress",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
