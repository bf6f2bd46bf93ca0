"""
Cross-app test suite for the farmer registry.

- integration/ - end-to-end review workflow through the API
- factories.py - registrant payload builders shared with the app tests

App-specific tests live beside each app (e.g. farmers/tests.py).
"""
