import os

# Must run before any app module reads settings or builds the engine.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ENVIRONMENT"] = "local"
os.environ["JWT_SECRET"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["PASSWORD_PBKDF2_ROUNDS"] = "1000"
os.environ["LOG_LEVEL"] = "WARNING"
