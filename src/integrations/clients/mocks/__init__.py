"""
Mock integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when:
- No Stripe test key is at hand
- We want to exercise the dispatcher end-to-end without external dependencies

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients should return data shaped according to src/integrations/contracts/*

Switching to real:
Set STRIPE_SECRET_KEY and leave INTEGRATIONS_MODE unset (or "real").
"""
