"""
Test suite for the Taskboard API.

Subpackages:
- unit: models, credentials, access gate, store and analytics
- integration: HTTP endpoints through the Flask test client
- security: ownership isolation, token handling and mass assignment
"""
