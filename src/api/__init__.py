"""HTTP API for PCP Tracker."""
