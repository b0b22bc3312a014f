"""Shared fixtures for hub2ical tests."""
import logging

import pytest


SAMPLE_HTML = """
<html>
    <body>
        <div class="hub-head">
            <h1 class="hub-head-main">
                Session: Rust for Systems
            </h1>
        </div>
        <div class="hub-text"><p>A talk about ownership.</p></div>
        <div class="hub-event-details">
            <span class="hub-event-details__day">Day 2</span>
            <span class="hub-event-details__time">14:00 - 15:30</span>
        </div>
    </body>
</html>
"""


@pytest.fixture
def sample_html():
    """Hub event page with every field present."""
    return SAMPLE_HTML


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers installed by setup_logging so they don't outlive a test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
