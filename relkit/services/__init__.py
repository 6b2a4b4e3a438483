"""Services built on core and platform."""
