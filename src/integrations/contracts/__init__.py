"""
Contracts (data models).

This folder defines the request/response shapes for external integrations.
Examples:
- Stripe collaborator interface and error type
- Gateway method names and their parameter models
- Minor-unit amount conversion

Why this exists:
- Ensures consistent data structures across mock and real clients
- Prevents “guessing” payload formats in multiple places
- Makes integration safer: the dispatcher relies on stable models, not on ad-hoc dicts

Both mock and real HTTP clients should use these contracts.
"""
