# app/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import validator
from typing import List
from pathlib import Path


DEFAULT_MODEL_IDS = ",".join([
    "indian-food-vitsx/3",
    "indian-food-jwife/2",
    "indian-food-jwife/2",
    "indian-food-huqdn/1",
    "indian-food-dca77/1",
    "indian-food-clzdq/1",
    "indian-food-iubji/1",
    "south-indian-food-detection/3",
    "indian-food-detection-kzw9g/1",
    "indian-food-detection-5jphr/5",
    "indian-food-classifier-pr7rf/1",
    "-food-detection/1",  # broken on purpose, fails at request time
    "food-detection-pgfas/2",
    "food-4oq56/1",
    "food-detection-rq1n2/1",
])


# =============================================================================
# Detection Config (nested)
# =============================================================================
class DetectionConfig(BaseSettings):
    """Configuration for the remote classifier fan-out"""

    # Remote API
    api_base_url: str = "https://detect.roboflow.com"
    api_key: str = ""
    model_ids: str = DEFAULT_MODEL_IDS

    # Per-request deadline in seconds
    request_timeout: float = 18.0

    # Multipart field carrying the image
    upload_field: str = "file"

    # Validators
    @validator('request_timeout')
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        return v

    @validator('api_base_url')
    def validate_base_url(cls, v):
        return v.rstrip('/')

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def model_ids_list(self) -> List[str]:
        # Duplicates and odd ids are kept: each one is queried as configured
        return [m.strip() for m in self.model_ids.split(",")]

    model_config = SettingsConfigDict(
        env_prefix="DETECTION__",   # map .env variables like DETECTION__API_KEY
        extra="ignore"
    )


# =============================================================================
# Main Application Settings
# =============================================================================
class Settings(BaseSettings):
    """Application settings with validation"""

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = "FoodLog.DetectionService"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # Local data
    # -------------------------------------------------------------------------
    food_catalog_path: Path = Path("./data/food_data.json")
    export_dir: Path = Path("./data/exports")

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------
    enable_metrics: bool = False
    prometheus_port: int = 9090

    log_format: str = "console"  # json, console
    log_file_path: Path = Path("./data/logs/foodlog-detection.log")
    log_max_size: str = "10MB"
    log_backup_count: int = 5

    # -------------------------------------------------------------------------
    # Nested Detection Config
    # -------------------------------------------------------------------------
    detection: DetectionConfig = DetectionConfig()

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @validator('log_level')
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @validator('log_format')
    def validate_log_format(cls, v):
        if v not in ('json', 'console'):
            raise ValueError("log_format must be 'json' or 'console'")
        return v

    # -------------------------------------------------------------------------
    # Pydantic Settings Config
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
