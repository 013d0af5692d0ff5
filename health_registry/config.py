import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()

class Config:
    SQLALCHEMY_DATABASE_URI     = os.getenv("DATABASE_URL", "sqlite:///health_registry.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY              = os.getenv("JWT_SECRET_KEY")
    JWT_ACCESS_TOKEN_EXPIRES    = timedelta(seconds=int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES", "3600")))

    SECRET_KEY                  = os.getenv("FLASK_SECRET_KEY")
    DEBUG                       = os.getenv("FLASK_DEBUG") == "True"

    BCRYPT_ROUNDS               = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Bootstrapped at startup only while no authority is stored yet
    REGISTRY_AUTHORITY          = os.getenv("REGISTRY_AUTHORITY")

    SSL_CERT_FILE               = os.getenv("SSL_CERT_FILE", "certs/registry.crt")
    SSL_KEY_FILE                = os.getenv("SSL_KEY_FILE", "certs/registry.key")


class TestConfig(Config):
    TESTING                     = True
    SQLALCHEMY_DATABASE_URI     = "sqlite://"
    JWT_SECRET_KEY              = "test-secret-key-with-enough-length-for-hs256"
    SECRET_KEY                  = "test"
    REGISTRY_AUTHORITY          = None
    BCRYPT_ROUNDS               = 4
