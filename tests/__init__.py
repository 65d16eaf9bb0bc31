"""
Quote Client Test Suite
=======================

This package contains tests for the quote client including:
- Unit tests for individual components
- Integration tests for the quote flow over the HTTP transport
"""
