"""Command line interface for the RD Station CRM client."""
