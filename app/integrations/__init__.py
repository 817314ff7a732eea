"""
Outbound integrations. Only HubSpot for now.
"""

from .hubspot import GatewayResponse, HubSpotFormsClient

__all__ = ["GatewayResponse", "HubSpotFormsClient"]
