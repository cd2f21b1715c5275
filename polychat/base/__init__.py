"""
polychat base package.

Provider-agnostic building blocks: the error taxonomy, structured logging,
DTOs (messages, models, requests, responses), provider bindings, retry policy
and HTTP client factory. Import from the submodules; this package initializer
stays empty so that configuration and wire modules can depend on individual
pieces without import cycles.
"""
