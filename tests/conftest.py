"""Shared pytest configuration and fixtures."""

import pytest

from soupstream.testing import build_tree


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running tests excluded by run_tests.py")


@pytest.fixture
def sample_doc():
    """The canonical sample document.

    Structure:
        #document
        └── html
            ├── head
            │   └── title
            │       └── "T"
            └── body
                └── p
                    └── "hi"
    """
    return build_tree(
        ("html",
            ("head", ("title", "T")),
            ("body", ("p", "hi"))),
    )
