"""HTTP and database monitoring."""
