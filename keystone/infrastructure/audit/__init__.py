"""Audit adapters."""

from keystone.infrastructure.audit.postgres_adapter import PostgresAuditAdapter

__all__ = ["PostgresAuditAdapter"]
