"""
Real HTTP integration clients.

These clients communicate with real external systems via HTTP:
- Stripe REST API (customers, invoice items, invoices, payment intents)

Important:
- Must implement the same interfaces as the mock clients
- Must return data shaped according to src/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in src/gateway/context.py only.
"""
