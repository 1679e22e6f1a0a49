"""Browser version parsing and driver release resolution."""
