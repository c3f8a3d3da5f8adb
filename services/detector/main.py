# services/detector/main.py
import asyncio
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from app.settings import settings
from core.models import DetectionOutcome
from infrastructure.external.detection_client import DetectionApiClient
from infrastructure.monitoring.metrics import setup_prometheus_metrics, update_prometheus_metrics
from services.nutrition import load_food_catalog
from shared.config.logging_config import configure_logging, logger as event_logger
from .service import DetectionService

logger = logging.getLogger(__name__)

SERVICE_NAME = "foodlog-detect"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Detect a food from a photo using many remote models')
    parser.add_argument('image', type=Path, help='Photo to classify')
    parser.add_argument(
        '--catalog',
        type=Path,
        default=settings.food_catalog_path,
        help='Food catalog JSON file'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        default=settings.detection.request_timeout,
        help='Per-model request deadline in seconds'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=settings.log_level,
        help='Set logging level'
    )
    parser.add_argument('--json', action='store_true', help='Print the outcome as JSON')
    parser.add_argument(
        '--metrics-port',
        type=int,
        default=settings.prometheus_port if settings.enable_metrics else None,
        help='Expose Prometheus metrics on this port (0 disables)'
    )
    return parser


def format_outcome(outcome: DetectionOutcome) -> str:
    resolution = outcome.resolution
    lines = [f"Models answered: {outcome.responses_ok}/{outcome.responses_ok + outcome.responses_failed}"]
    if not resolution.detected:
        lines.append("No items detected. Pick manually.")
        return "\n".join(lines)

    lines.append(
        f"Detected: {resolution.label} "
        f"(votes={resolution.total_count}, max confidence={resolution.max_confidence:.2f})"
    )
    if outcome.food is None:
        lines.append("Not found in local database. Please add manually.")
    else:
        unit = "pieces" if outcome.food.is_piece else "grams"
        lines.append(f"Suggested quantity: {outcome.suggested_quantity:g} {unit} ({outcome.suggested_grams:g} g)")
    return "\n".join(lines)


async def run(args: argparse.Namespace) -> int:
    catalog = load_food_catalog(args.catalog)
    if not catalog.loaded:
        logger.warning(f"⚠️ Food catalog {args.catalog} is empty or unreadable")

    config = settings.detection.model_copy(update={'request_timeout': args.timeout})
    client = DetectionApiClient(timeout=args.timeout)

    if args.metrics_port:
        setup_prometheus_metrics(SERVICE_NAME, port=args.metrics_port)

    async with DetectionService(catalog, client=client, config=config) as service:
        outcome = await service.detect_file(args.image)
        update_prometheus_metrics(SERVICE_NAME, service.metrics)

    event_logger.info(
        "detection_finished",
        image=str(args.image),
        status=outcome.resolution.status.value,
        label=outcome.resolution.label,
        models_ok=outcome.responses_ok,
        models_failed=outcome.responses_failed,
    )

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
    else:
        print(format_outcome(outcome))

    return 0 if outcome.detected else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point"""
    args = build_parser().parse_args(argv)

    configure_logging(
        log_level=args.log_level,
        log_format=settings.log_format,
        log_file_path=settings.log_file_path,
        log_max_size=settings.log_max_size,
        log_backup_count=settings.log_backup_count
    )

    if not args.image.is_file():
        logger.error(f"❌ Image not found: {args.image}")
        return 2

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("🛑 Detection stopped by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
