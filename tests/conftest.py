import pytest

from interface.middleware.rate_limit import limiter


# Rate limits are exercised by slowapi itself; router tests hit endpoints freely
@pytest.fixture(autouse=True)
def disable_rate_limit():
    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous
