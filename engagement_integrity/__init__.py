"""Engagement integrity evaluation pipeline for community raid submissions."""
