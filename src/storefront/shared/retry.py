"""Run a command, retrying when it lost an optimistic-concurrency race.

A handler that read a product, cart or order which another writer changed
before commit fails with ``ExpectedVersionError`` and its unit of work is
rolled back. Re-processing the command re-reads everything, so the retry
sees the winner's state and usually ends in a domain error (for example
``InsufficientStock``) rather than a conflict.
"""

import os

import structlog
from protean.exceptions import ExpectedVersionError, ProteanException
from protean.utils.globals import current_domain

from storefront.shared.errors import Conflict, Internal

logger = structlog.get_logger(__name__)


def conflict_retries() -> int:
    return max(int(os.getenv("STOREFRONT_CONFLICT_RETRIES", "3")), 0)


def process_with_retry(command):
    """Process ``command`` synchronously and return the handler's result.

    Domain errors propagate unchanged. Anything else is reported as
    ``Internal`` once the unit of work has rolled back.
    """
    command_name = type(command).__name__
    attempts = conflict_retries() + 1

    for attempt in range(1, attempts + 1):
        try:
            return current_domain.process(command, asynchronous=False)
        except ExpectedVersionError:
            logger.warning("Concurrent update detected", command=command_name, attempt=attempt)
        except (ProteanException, Internal):
            raise
        except Exception as exc:
            logger.exception("Command failed", command=command_name)
            raise Internal(f"{command_name} failed: {exc}") from exc

    raise Conflict(f"{command_name} lost {attempts} concurrent update races, try again")
