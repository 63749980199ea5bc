"""Content Cluster Planner backend application."""
