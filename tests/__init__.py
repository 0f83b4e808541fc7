"""
Test suite for the school supply quote API.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_override_rule_service.py -v
"""
