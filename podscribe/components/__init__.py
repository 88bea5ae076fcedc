"""Components that make up the podcast pipeline."""
