import pytest

from messaging.core.logging.builder import setup_logging
from messaging.core.logging.filters import reset_request_id, set_request_id


@pytest.fixture(autouse=True)
def restore_logging(test_settings):
    """Tests here reconfigure logging; put the suite configuration back afterwards."""
    token = set_request_id(None)
    yield
    reset_request_id(token)
    setup_logging(test_settings)
