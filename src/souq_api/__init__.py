"""ThriftySouq storefront API: AI marketing tooling and order webhooks."""
