#!/usr/bin/env python3
"""
Configuration settings using Pydantic for environment variable loading
"""

import os
from typing import Optional, Dict, Any
import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load environment variables from .env file if it exists
load_dotenv()


class KubernetesSettings(BaseSettings):
    """Kubernetes configuration settings"""
    in_cluster: bool = os.getenv("KUBERNETES_IN_CLUSTER", "false").lower() == "true"
    kubeconfig_path: Optional[str] = os.getenv("KUBECONFIG_PATH")
    namespace: str = os.getenv("HPA_NAMESPACE", "")

    class Config:
        env_prefix = "KUBERNETES_"
        extra = "ignore"


class ExporterSettings(BaseSettings):
    """HTTP exposition and watch settings"""
    host: str = os.getenv("EXPORTER_HOST", "0.0.0.0")
    port: int = int(os.getenv("EXPORTER_PORT", "8080"))
    resync_period: int = int(os.getenv("EXPORTER_RESYNC_PERIOD", "30"))
    watch_timeout: int = int(os.getenv("EXPORTER_WATCH_TIMEOUT", "300"))

    class Config:
        env_prefix = "EXPORTER_"
        extra = "ignore"


class LoggingSettings(BaseSettings):
    """Logging configuration settings"""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file: Optional[str] = os.getenv("LOG_FILE", None)

    class Config:
        env_prefix = "LOG_"
        extra = "ignore"


class Settings(BaseSettings):
    """Main settings class that includes all sub-settings"""
    environment: str = os.getenv("ENVIRONMENT", "development")
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    kubernetes: KubernetesSettings = Field(default_factory=KubernetesSettings)
    exporter: ExporterSettings = Field(default_factory=ExporterSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def get_config_dict(self) -> Dict[str, Any]:
        """Flatten settings into a plain dictionary"""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "kubernetes": {
                "in_cluster": self.kubernetes.in_cluster,
                "kubeconfig_path": self.kubernetes.kubeconfig_path,
                "namespace": self.kubernetes.namespace
            },
            "exporter": {
                "host": self.exporter.host,
                "port": self.exporter.port,
                "resync_period": self.exporter.resync_period,
                "watch_timeout": self.exporter.watch_timeout
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "file": self.logging.file
            }
        }

    @classmethod
    def load_from_yaml_with_env_override(cls, yaml_path: str) -> "Settings":
        """Load settings from YAML file, substituting ${VAR} references from the environment"""
        yaml_config = {}
        if os.path.exists(yaml_path):
            with open(yaml_path, 'r') as f:
                yaml_content = f.read()
                for key, value in os.environ.items():
                    yaml_content = yaml_content.replace(f"${{{key}}}", value)
                yaml_config = yaml.safe_load(yaml_content) or {}

        return Settings(
            environment=yaml_config.get("environment", "development"),
            debug=yaml_config.get("debug", False),
            kubernetes=KubernetesSettings(**yaml_config.get("kubernetes", {})),
            exporter=ExporterSettings(**yaml_config.get("exporter", {})),
            logging=LoggingSettings(**yaml_config.get("logging", {}))
        )


# Global settings instance
settings = Settings()
