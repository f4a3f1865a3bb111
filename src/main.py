"""Main entry point for torhoney.

Classifies every Tor exit node with Project Honeypot's http:BL and prints
one CSV line per address to stdout.
"""

import logging
import sys
import time

from src.config import Config
from src.services.exit_list import fetch_exit_list
from src.services.logger import log_run_summary, setup_logging
from src.services.result_consumer import write_results
from src.services.worker_pool import WorkerPool


logger = logging.getLogger(__name__)


def main() -> int:
    """Main execution function.

    Returns:
        int: Exit code (0 for success, 1 for fatal error).
    """
    start_time = time.time()

    setup_logging()

    try:
        # An empty access key stops here, before any lookup
        config = Config.from_env()
        setup_logging(verbose=config.verbose)
        logger.info(
            f"Configuration loaded: {config.resolver_workers} resolver workers, "
            f"zone {config.dnsbl_zone}"
        )

        addresses = fetch_exit_list(config.exit_list_url, config.http_timeout)

        pool = WorkerPool(
            token=config.honeypot_access_key,
            size=config.resolver_workers,
            zone=config.dnsbl_zone,
            timeout=config.dns_timeout,
        )
        expected = pool.start(addresses)

        stats = write_results(
            pool.results,
            expected,
            sys.stdout,
            ordered=config.preserve_input_order,
        )
        pool.wait()

        duration_sec = time.time() - start_time
        log_run_summary(
            total_ips=stats.rendered,
            listed=stats.listed,
            not_listed=stats.not_listed,
            errors=stats.errors,
            workers=pool.size,
            duration_sec=duration_sec,
        )
        return 0

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
