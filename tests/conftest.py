"""pytest configuration.

Registers custom markers and shared settings for the test suite.
"""


# Marker definitions
def pytest_configure(config):
    """
    pytest configuration hook.

    Args:
        config: pytest config object
    """
    config.addinivalue_line("markers", "slow: mark tests that take a long time to run")
    config.addinivalue_line("markers", "api: mark tests that would call external APIs")
