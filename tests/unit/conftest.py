"""
Unit Test Layer Configuration (Layer 4)

Structure:
    tests/unit/
    └── crowdfunding/   Ledger store, components and queries

Usage:
    pytest tests/unit -v                 # All unit tests
    pytest tests/unit/crowdfunding -v    # Crowdfunding ledger only
"""
import os
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
