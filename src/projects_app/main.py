# Rev 0.2.0

# src/projects_app/main.py  (Rev 0.2.0)
import sys

from .app_context import AppContext
from .models.errors import DbError
from .ui.console import ProjectsApp
from .utils.config import load_settings
from .utils.logging_setup import get_logger, setup_logging


def main() -> int:
    settings = load_settings()
    setup_logging(settings["logging"]["level"])
    log = get_logger("main")

    # --- DI wiring ---
    try:
        ctx = AppContext.create(settings["database"]["path"])
    except DbError as exc:
        log.error("Startup failed: %s", exc)
        print(f"Unable to start: {exc}", file=sys.stderr)
        return 1

    # --- menu loop ---
    try:
        ProjectsApp(ctx.project_service).run()
    except KeyboardInterrupt:
        print()
        log.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
