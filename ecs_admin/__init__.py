"""Admin CLI for inspecting and managing saved world snapshots."""
