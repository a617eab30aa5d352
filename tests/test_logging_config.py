import json
import logging

import pytest
import structlog

from routerscope.logging_config import SERVICE_NAME, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_lines_carry_service_and_bound_network(capsys, restore_root_logger):
    setup_logging("INFO")

    with structlog.contextvars.bound_contextvars(network_id="10"):
        logging.getLogger("routerscope.services.command_renderer").info("rendered commands")
    logging.getLogger("routerscope.services.command_renderer").info("outside request")

    lines = [json.loads(line) for line in capsys.readouterr().out.strip().splitlines()]
    inside, outside = lines[-2], lines[-1]

    assert inside["event"] == "rendered commands"
    assert inside["service"] == SERVICE_NAME
    assert inside["network_id"] == "10"
    assert inside["level"] == "info"
    assert outside["service"] == SERVICE_NAME
    assert "network_id" not in outside


def test_noisy_loggers_quieted(restore_root_logger):
    setup_logging("DEBUG")

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger().level == logging.DEBUG
