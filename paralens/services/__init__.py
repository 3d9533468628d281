"""
Services for ParaLens.

High-level entry points:
- VaultCollector: raw host notes -> normalized VaultSnapshot
- ParaAnalyticsEngine: every analytics component over a snapshot
"""

from paralens.services.analytics_engine import ParaAnalyticsEngine
from paralens.services.vault_collector import VaultCollector

__all__ = [
    "ParaAnalyticsEngine",
    "VaultCollector",
]
