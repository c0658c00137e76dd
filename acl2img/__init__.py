"""Build the arm64 ACL2 image locally and merge it with the CI-built amd64 image."""

__version__ = "0.1.0"
