"""Services - feed pipeline pieces not tied to one API."""
