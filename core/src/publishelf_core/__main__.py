from __future__ import annotations

import logging

from publishelf_core.cluster import bind_listener, is_primary
from publishelf_core.cluster.primary import run_primary
from publishelf_core.cluster.worker import serve_worker
from publishelf_core.config import load_dotenv_file, load_settings
from publishelf_core.logs import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    load_dotenv_file()
    settings = load_settings()
    configure_logging(settings)

    if is_primary():
        run_primary(settings)
        return

    # Started from inside another multiprocessing parent: serve in-process.
    logger.info("Not the primary process; serving without supervision")
    serve_worker(settings, bind_listener(settings))


if __name__ == "__main__":
    main()
