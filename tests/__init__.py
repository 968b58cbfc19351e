"""
Test suite for the Todo API.

- Unit tests: aggregates, security helpers and services in isolation
- Integration tests: the HTTP surface against a freshly seeded in-memory store
"""
