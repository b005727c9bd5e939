from __future__ import annotations

import logging
from typing import Any, Dict, Iterator

import pytest

from tests._fixtures.documents import valid_document


@pytest.fixture
def document() -> Dict[str, Any]:
    """Provide a fresh, structurally valid CVUF document."""
    return valid_document()


@pytest.fixture(autouse=True)
def _reset_cvufgen_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog keeps seeing cvufgen records."""
    yield
    logger = logging.getLogger("cvufgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.NOTSET)
