"""Keystone: identity and session subsystem.

Credential verification, session issuance and validation, login rate
limiting and lockout, password lifecycle, account lifecycle and
security/audit logging for a multi-tenant CMS.
"""

__version__ = "0.1.0"
