import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from loguru import logger


@pytest.fixture
def log_lines():
    """Capture loguru output as '<LEVEL> | <message>' strings."""
    lines = []
    logger.remove()
    logger.add(lambda msg: lines.append(msg.rstrip("\n")),
               format="{level} | {message}", level="DEBUG")
    yield lines


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger.remove()


def make_session(*bodies):
    """
    Fake aiohttp session whose `post` returns the given bodies in order.

    A body that is an Exception is raised by `post`; a str is served as raw
    text through `json()`; anything else is returned as parsed JSON.
    """
    session = MagicMock()
    contexts = []
    for body in bodies:
        ctx = AsyncMock()
        if isinstance(body, BaseException):
            ctx.__aenter__.side_effect = body
        else:
            resp = AsyncMock()
            resp.status = 200
            if isinstance(body, str):
                resp.json.side_effect = lambda content_type=None, raw=body: json.loads(raw)
            else:
                resp.json.return_value = body
            ctx.__aenter__.return_value = resp
        ctx.__aexit__.return_value = None
        contexts.append(ctx)
    session.post = MagicMock(side_effect=contexts)
    return session


def ok_body(lamports: int, slot: int = 1) -> dict:
    return {"jsonrpc": "2.0", "id": 1, "result": {"context": {"slot": slot}, "value": lamports}}
