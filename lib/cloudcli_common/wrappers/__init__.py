"""Composable CloudCliApi wrappers (logging, read-only)."""
