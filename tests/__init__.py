# digestkit Test Suite
"""
Test suite including:
- Unit tests for the fixed-width integer layer
- Known-answer tests for every hash engine
- Streaming context lifecycle tests
- Cross-checks against hashlib and the cryptography package

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
