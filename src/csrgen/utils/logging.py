import logging
import sys
from typing import Optional

from ..config import LOG_LEVEL

ROOT_LOGGER = "csrgen"


def get_logger(component: Optional[str] = None):
    """Return the csrgen logger, or a child named ``csrgen.<component>``.

    The stdout handler lives on the ``csrgen`` logger only; children propagate.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        h = logging.StreamHandler(sys.stdout)
        fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(message)s")
        h.setFormatter(fmt)
        root.addHandler(h)
        root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    if component:
        return root.getChild(component)
    return root
