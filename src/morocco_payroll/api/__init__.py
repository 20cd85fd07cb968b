"""HTTP API for the payroll engine."""

from morocco_payroll.api.app import create_app

__all__ = ["create_app"]
