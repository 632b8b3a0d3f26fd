"""Request metadata enrichers."""

from keystone.infrastructure.enrichers.device_enricher import UserAgentDeviceEnricher

__all__ = ["UserAgentDeviceEnricher"]
