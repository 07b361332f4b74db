"""
Maintenance entry point for the tennis tracker.

Recalculates player statistics, consolidates duplicate players, flags
possible duplicate matches and writes the CSV reports.
"""

import logging
import sys

from database.errors import StoreError
from reports.report_generator import ReportGenerator
from services.match_service import create_match_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main(config_file: str = "config.yaml") -> None:
    """Main application entry point."""
    try:
        logger.info("Starting tennis tracker maintenance...")

        service, db_manager = create_match_service(config_file=config_file)
        logging.getLogger().setLevel(service.config['logging']['level'])
        logger.info("Match service initialized")

        if db_manager is not None:
            stats = db_manager.get_database_stats(service.auth_provider.authenticate())
            logger.info(f"Database statistics: {stats}")

        consolidation = service.consolidate_duplicate_players()
        if consolidation.changed:
            logger.info(f"Merged {consolidation.groups_merged} duplicate player group(s)")

        service.recalculate_all_player_stats()

        for first, second in service.detect_duplicate_matches():
            logger.warning(f"Possible duplicate matches: {first.id} and {second.id} "
                           f"({first.teams[0].display_name} vs {first.teams[1].display_name})")

        logger.info("Generating reports...")
        report_generator = ReportGenerator(service.store, service.config)
        report_results = report_generator.generate_all_reports()
        logger.info(f"Generated reports: {report_results}")

        logger.info("Tennis tracker maintenance completed successfully")

    except StoreError as e:
        logger.error(f"Error in tennis tracker: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "config.yaml")
