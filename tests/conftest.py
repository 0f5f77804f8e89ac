import os

# Keep the module-level engine off the on-disk database during tests.
os.environ.setdefault("DENTAL_DATABASE_URL", "sqlite://")
os.environ.setdefault("DENTAL_SEED_DEFAULTS", "false")
