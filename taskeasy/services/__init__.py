"""Task operations, persistence adapter and task board."""
