"""View models (Qt-free) for the launcher views."""
