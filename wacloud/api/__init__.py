"""HTTP layer of the webhook service."""
