"""Core errors package."""

from keystone.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
