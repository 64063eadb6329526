"""Key column resolution, reports, summary lines and batch orchestration."""
