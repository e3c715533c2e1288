# src/kukey_core/services/__init__.py
"""Business rules for timetables, the point economy and community identities.

Modules are imported directly (``from kukey_core.services.point_ledger import
PointLedger``) so repositories can depend on the pure schedule helpers
without an import cycle.
"""
