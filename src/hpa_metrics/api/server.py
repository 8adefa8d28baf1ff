#!/usr/bin/env python3
"""
FastAPI server exposing the scrape endpoint
"""

from datetime import datetime, timezone
from typing import Dict, Optional
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry
import uvicorn

from .. import __version__
from ..core.collector import render_metrics
from ..core.logging_config import get_logger

logger = get_logger(__name__)


class APIServer:
    """FastAPI server for exporter endpoints"""

    def __init__(self, store, registry: CollectorRegistry, config: Optional[Dict] = None):
        """
        Initialize API server

        Args:
            store: HPAStore feeding the collector
            registry: Registry holding the HPA collector
            config: Configuration dictionary
        """
        self.store = store
        self.registry = registry
        self.config = config or {}
        self.app = FastAPI(
            title="HPA Metrics Exporter",
            description="kube_hpa_* metrics for HorizontalPodAutoscaler objects",
            version=__version__
        )
        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes"""

        @self.app.get("/")
        async def root():
            """Root endpoint"""
            return {
                "service": "HPA Metrics Exporter",
                "version": __version__,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        @self.app.get("/health")
        async def health_check():
            """Healthy once the first list of autoscalers has completed"""
            synced = self.store.synced
            return JSONResponse(
                content={
                    "status": "healthy" if synced else "unhealthy",
                    "synced": synced,
                    "objects": len(self.store),
                    "timestamp": datetime.now(timezone.utc).isoformat()
                },
                status_code=200 if synced else 503
            )

        @self.app.get("/metrics")
        def metrics():
            """Prometheus text exposition"""
            try:
                payload = render_metrics(self.registry)
            except Exception as e:
                logger.error(f"Error collecting metrics: {e}", exc_info=True)
                raise HTTPException(status_code=500, detail=str(e))
            return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    def run(self, host: str = "0.0.0.0", port: int = 8080):
        """Run the API server"""
        logger.info(f"Starting API server on {host}:{port}")
        uvicorn.run(self.app, host=host, port=port, log_level="info")
