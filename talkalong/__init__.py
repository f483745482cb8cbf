# Semantic Versioning (semver)
# Format: MAJOR.MINOR.PATCH
# - MAJOR: Incompatible API changes
# - MINOR: Backwards-compatible functionality additions
# - PATCH: Backwards-compatible bug fixes
# See: https://semver.org/
__version__ = "0.1.0"
