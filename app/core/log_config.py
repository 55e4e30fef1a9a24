import logging

from app.core.config import settings

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    global _configured

    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())

    # create_app may run more than once (tests, reloads)
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)
    _configured = True

    # httpx logs every LLM / Supabase request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
