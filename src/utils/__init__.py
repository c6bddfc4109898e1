"""
Utility modules for the Stripe gateway
"""
from .config_loader import CorsConfig, GatewaySettings, load_gateway_settings

__all__ = [
    'CorsConfig',
    'GatewaySettings',
    'load_gateway_settings',
]
