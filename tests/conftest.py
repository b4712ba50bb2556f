from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Drop handlers installed by configure_logging during a test.

    Handlers bound to a captured stderr would otherwise outlive the capture.
    """
    logger = logging.getLogger("blockmark")
    level = logger.level
    try:
        yield
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(level)


@pytest.fixture
def mixed_document() -> str:
    """A document using every block construct the parser knows."""
    return """# Title

Intro paragraph with **bold**.

- one
- two

1. first
2. second

> A quote

```python
print("hi")
```

---

Closing words."""
