"""Base layer: errors, logging, cancellation, timeouts and HTTP glue."""
