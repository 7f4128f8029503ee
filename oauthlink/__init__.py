"""Link user accounts to OAuth identity providers."""
