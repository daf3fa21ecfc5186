"""
Shared utilities for the fact matching engine.

Common building blocks consumed by the rules package:

- config: Engine configuration via pydantic-settings
- logging: Structured logging with evaluation correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Do not import from fact_matching into shared/.
"""
