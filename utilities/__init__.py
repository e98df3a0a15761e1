"""Configuration and logging shared by the Bookstore API."""
