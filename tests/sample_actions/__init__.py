"""REST actions and models used by the actiondoc tests."""
