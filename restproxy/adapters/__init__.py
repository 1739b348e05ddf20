"""Infrastructure adapters.

Adapters implement protocols defined in core/protocols/.
Each adapter wraps an external library (httpx) or fakes it for tests.
"""
