"""
Logging bootstrap for programs built on sextant.

Sextant modules log through `logging.getLogger(__name__)` at debug level
(resolution steps, parsed options, config overlays) and never configure
handlers themselves. A host program that wants to see those traces calls
configure_logging() once, before start().
"""
import logging

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level=logging.INFO, /):
    """
    Configure the root logger once.

    Repeated calls keep the existing handlers (no force-reset) so that
    embedding applications keep their own setup.

    Example
        configure_logging(logging.DEBUG)
        start(program)
    """
    logging.basicConfig(level=level, format=FORMAT)
    logging.getLogger("sextant").setLevel(level)


__all__ = (
    "configure_logging",
)
