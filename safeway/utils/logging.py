import logging

from safeway.config import LOG_LEVEL


class HealthCheckFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return 'GET / HTTP' not in record.getMessage()


def setup_logging(level=None):
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("werkzeug").addFilter(HealthCheckFilter())
