import logging
import threading
import time
from typing import NamedTuple, Optional

import razorpay
from django.conf import settings

from .models import Integration

logger = logging.getLogger(__name__)


class GatewayClient(NamedTuple):
    client: razorpay.Client
    key_id: str
    built_at: float


class GatewayClientCache:
    """
    Process-wide Razorpay client built from the Integration row.

    A snapshot younger than `ttl` seconds is served without touching the
    database. Snapshots are immutable and swapped under a lock, so callers
    racing on a stale slot trigger a single rebuild.
    """

    def __init__(self, integration_name=None, ttl=None, clock=time.monotonic):
        self.integration_name = integration_name or settings.RAZORPAY_INTEGRATION_NAME
        self.ttl = settings.RAZORPAY_CLIENT_TTL if ttl is None else ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot: Optional[GatewayClient] = None
        self.last_error: Optional[Exception] = None

    def _is_fresh(self, snapshot) -> bool:
        return snapshot is not None and self._clock() - snapshot.built_at < self.ttl

    def get(self) -> Optional[GatewayClient]:
        snapshot = self._snapshot
        if self._is_fresh(snapshot):
            return snapshot

        with self._lock:
            snapshot = self._snapshot
            if self._is_fresh(snapshot):
                return snapshot

            self._snapshot = self._build()
            return self._snapshot

    def invalidate(self):
        with self._lock:
            self._snapshot = None
        logger.info("Gateway client cache invalidated", extra={"integration": self.integration_name})

    def _build(self) -> Optional[GatewayClient]:
        credentials = self._load_credentials()
        if credentials is None:
            return None

        key_id, key_secret = credentials
        client = razorpay.Client(auth=(key_id, key_secret))
        logger.info("Built payment gateway client", extra={"integration": self.integration_name})
        return GatewayClient(client=client, key_id=key_id, built_at=self._clock())

    def _load_credentials(self):
        try:
            integration = Integration.objects.filter(name=self.integration_name).first()
        except Exception as exc:
            self.last_error = exc
            logger.exception("Failed to load %s settings", self.integration_name)
            return None

        self.last_error = None
        if integration is None or not integration.enabled:
            return None

        blob = integration.settings if isinstance(integration.settings, dict) else {}
        key_id = blob.get("apiKey")
        key_secret = blob.get("apiSecret")
        if not key_id or not key_secret:
            logger.warning("%s is enabled but its keys are incomplete", self.integration_name)
            return None
        return key_id, key_secret


gateway_cache = GatewayClientCache()


def get_razorpay_client():
    snapshot = gateway_cache.get()
    return snapshot.client if snapshot else None
