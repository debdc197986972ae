"""setup-k6 — provision k6 (and optionally Chrome) inside a CI job."""

__version__ = "0.1.0"
