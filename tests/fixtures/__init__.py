"""
Test Fixtures and Utilities

- synthetic_data: Synthetic SpareBank1 transactions and YNAB responses
- http: Fake requests sessions and canned responses
"""
