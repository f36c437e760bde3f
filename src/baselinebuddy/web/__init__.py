"""HTTP API over the scanning pipeline."""
