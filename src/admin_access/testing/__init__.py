"""Testing – fixtures and hypothesis strategies for code built on admin_access."""
