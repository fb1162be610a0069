"""SQLite storage for PCP Tracker."""
