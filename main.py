#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
AdSpace Discovery - headless browse run
Main entry point for the application

Mounts the discovery engine against the configured repository, waits for
the property collection, optionally applies a search term and logs the
resulting snapshot.

Usage:
    python main.py [search term]
"""

import sys

from PyQt5.QtCore import QCoreApplication, QTimer

from app.config import Config
from controllers.discovery_controller import DiscoveryController, DiscoverySnapshot
from services.data_provider_factory import create_property_repository
from services.display_mappings import property_address
from services.distance_service import format_distance
from services.geolocation_service import create_geolocation_provider
from services.task_runner import QtTaskRunner
from utils.logger import setup_logger


def log_snapshot(logger, snapshot: DiscoverySnapshot):
    """Write the visible list to the log."""
    viewport = snapshot.viewport
    logger.info(
        f"Mode: {snapshot.selection.mode.value} | "
        f"center ({viewport.center.lat:.4f}, {viewport.center.lng:.4f}) z{viewport.zoom} | "
        f"search '{snapshot.search_term}'"
    )
    if not snapshot.visible_entities:
        logger.info(">> No properties to show")
    for index, item in enumerate(snapshot.visible_entities, start=1):
        logger.info(
            f"{index:>2}. {item.entity.display_name} - "
            f"{property_address(item.entity)} ({format_distance(item.distance_km)})"
        )


def main():
    """Main application entry point."""

    # Initialize logging
    logger = setup_logger()
    search_term = " ".join(sys.argv[1:])

    try:
        app = QCoreApplication(sys.argv)
        app.setApplicationName(Config.APP_NAME)

        # Log startup
        logger.info("=" * 80)
        logger.info(f"Starting {Config.APP_NAME} {Config.VERSION}")
        logger.info("=" * 80)

        controller = DiscoveryController(
            repository=create_property_repository(),
            geolocation=create_geolocation_provider(),
            task_runner=QtTaskRunner(),
        )

        def on_completed(operation: str, success: bool):
            if operation != "load_properties":
                return
            if not success:
                logger.warning(f">> Property load failed: {controller.last_error}")
            if search_term:
                controller.set_search_term(search_term)
            log_snapshot(logger, controller.snapshot())
            controller.unmount()
            app.quit()

        controller.operation_completed.connect(on_completed)
        QTimer.singleShot(0, controller.mount)

        exit_code = app.exec_()
        logger.info(f"Application closed with exit code: {exit_code}")
        sys.exit(exit_code)

    except Exception as e:
        error_msg = f"Fatal error during application startup: {e}"
        print(f"\n[ERROR] {error_msg}")
        print(f"\nPlease check {Config.LOG_PATH} for details")
        logger.exception(error_msg)
        sys.exit(1)


if __name__ == "__main__":
    main()
