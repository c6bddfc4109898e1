import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict

import psutil

from src.utils.config_loader import GatewaySettings

logger = logging.getLogger(__name__)


class HealthReporter:
    """Liveness snapshot for the deployment platform's health probe."""

    def __init__(self, settings: GatewaySettings):
        self._settings = settings
        self._process = psutil.Process()

    def uptime(self) -> float:
        return max(0.0, time.time() - self._process.create_time())

    def memory(self) -> Dict[str, Any]:
        info = self._process.memory_info()
        return {
            "rss": info.rss,
            "vms": info.vms,
            "percent": round(self._process.memory_percent(), 3),
        }

    def snapshot(self) -> Dict[str, Any]:
        status = {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": self.uptime(),
            "memory": self.memory(),
            "env": {
                "nodeEnv": self._settings.environment,
                "port": self._settings.port,
                "stripeConfigured": self._settings.stripe_configured,
            },
        }
        logger.info("Health check requested: %s", status)
        return status
