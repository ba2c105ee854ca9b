"""
Unit Tests for uci_driver

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_protocol.py

    # Run with coverage
    pytest tests/ --cov=uci_driver --cov-report=html

Integration tests start a small fake engine written in Python (see
conftest.py). Tests against a real Stockfish are skipped when it
is not installed.

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
