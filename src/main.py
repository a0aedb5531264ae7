"""Application bootstrap for the art review submission service.

This module starts the Flask development server when executed as a script.
Keeping the runtime bootstrap here (instead of in ``src/app.py``) ensures the
core app module can be safely imported by unit tests and tooling without
side-effects beyond building the app.
"""
from __future__ import annotations

import os
from contextlib import suppress

# Import the fully configured Flask ``app`` and logger from the application
from src.app import app, logger, shutdown_executor


def main() -> None:  # pragma: no cover - manual run path
    """Serve the submission endpoint until interrupted.

    On shutdown it triggers graceful cleanup of the upload executor defined
    in ``src.app``.
    """
    port = int(os.environ.get("PORT", 8080))
    logger.info("Serving submissions on port %d", port)
    try:
        app.run(host="0.0.0.0", port=port, use_reloader=False)
    except KeyboardInterrupt:  # pragma: no cover
        logger.info("Shutdown requested (KeyboardInterrupt). Exiting…")
    finally:
        with suppress(Exception):
            shutdown_executor()
        logger.info("Goodbye.")


if __name__ == "__main__":  # pragma: no cover
    main()
